"""
Request handlers shared by the research record views.

Each entity app keeps its own ``@api_view`` functions; those functions
delegate the list/create/detail mechanics here so that logging, audit
trail and error responses stay identical across all record types.
"""
from django.db import IntegrityError, transaction
from rest_framework import status
from rest_framework.response import Response

from .utils import create_audit_log, diff_changes


def project_reference(instance):
    """Title of the project a record belongs to, if any"""
    project = getattr(instance, 'project', None)
    return project.title if project is not None else None


def filtered_queryset(request, queryset, filterset_class=None):
    """Apply a FilterSet to the request's query params. Returns (queryset, errors)."""
    if filterset_class is None:
        return queryset, None
    filterset = filterset_class(request.query_params, queryset=queryset)
    if not filterset.is_valid():
        return None, filterset.errors
    return filterset.qs, None


def list_response(request, queryset, serializer_class, filterset_class=None):
    queryset, errors = filtered_queryset(request, queryset, filterset_class)
    if errors:
        return Response(errors, status=status.HTTP_400_BAD_REQUEST)
    serializer = serializer_class(queryset, many=True, context={'request': request})
    return Response(serializer.data)


def create_response(request, serializer_class, logger, **save_kwargs):
    model_name = serializer_class.Meta.model.__name__
    serializer = serializer_class(data=request.data, context={'request': request})
    if not serializer.is_valid():
        logger.warning(f"{model_name} creation validation failed: {serializer.errors}")
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        with transaction.atomic():
            instance = serializer.save(**save_kwargs)
    except IntegrityError as e:
        logger.error(f"IntegrityError creating {model_name}: {str(e)}", exc_info=True)
        return Response({'error': f'{model_name} conflicts with an existing record'}, status=status.HTTP_400_BAD_REQUEST)

    logger.info(f"{model_name} '{instance}' created by {request.user.username}")
    create_audit_log(
        request=request,
        action='create',
        model_name=model_name,
        object_id=instance.pk,
        changes=serializer.data,
        object_name=str(instance),
        object_reference=project_reference(instance),
    )
    return Response(serializer.data, status=status.HTTP_201_CREATED)


def detail_response(request, instance, serializer_class, logger, on_delete=None):
    """Handle GET/PUT/PATCH/DELETE for one record"""
    model_name = instance.__class__.__name__
    context = {'request': request}

    if request.method == 'GET':
        logger.debug(f"User {request.user.username} retrieved {model_name} {instance.pk}")
        return Response(serializer_class(instance, context=context).data)

    if request.method in ('PUT', 'PATCH'):
        before = serializer_class(instance, context=context).data
        serializer = serializer_class(instance, data=request.data, partial=request.method == 'PATCH', context=context)
        if not serializer.is_valid():
            logger.warning(f"{model_name} {instance.pk} update validation failed: {serializer.errors}")
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            with transaction.atomic():
                instance = serializer.save()
        except IntegrityError as e:
            logger.error(f"IntegrityError updating {model_name} {instance.pk}: {str(e)}", exc_info=True)
            return Response({'error': f'{model_name} conflicts with an existing record'}, status=status.HTTP_400_BAD_REQUEST)

        logger.info(f"{model_name} {instance.pk} updated by {request.user.username}")
        create_audit_log(
            request=request,
            action='update',
            model_name=model_name,
            object_id=instance.pk,
            changes=diff_changes(before, serializer.data),
            object_name=str(instance),
            object_reference=project_reference(instance),
        )
        return Response(serializer.data)

    # DELETE
    object_id = instance.pk
    object_name = str(instance)
    reference = project_reference(instance)
    if on_delete is not None:
        on_delete(instance)
    instance.delete()
    logger.info(f"{model_name} {object_id} deleted by {request.user.username}")
    create_audit_log(
        request=request,
        action='delete',
        model_name=model_name,
        object_id=object_id,
        object_name=object_name,
        object_reference=reference,
    )
    return Response(status=status.HTTP_204_NO_CONTENT)


def normalize_choice(value, choices):
    """Upper-case a path parameter and check it against model choices; None when invalid"""
    value = (value or '').strip().upper()
    valid = {choice for choice, _label in choices}
    return value if value in valid else None


def invalid_choice_response(label, value, choices):
    return Response(
        {'error': f"Invalid {label} '{value}'. Expected one of: {', '.join(choice for choice, _label in choices)}"},
        status=status.HTTP_400_BAD_REQUEST,
    )
