"""Shared django-filter base classes for research records"""
from functools import reduce
import operator

import django_filters
from django.db.models import Q


class SearchFilterSet(django_filters.FilterSet):
    """
    FilterSet with a free-text ``search`` parameter matched (icontains)
    against the fields listed in ``search_fields``.
    """
    search_fields = ()

    search = django_filters.CharFilter(method='filter_search')

    def filter_search(self, queryset, name, value):
        value = (value or '').strip()
        if not value or not self.search_fields:
            return queryset
        conditions = [Q(**{f'{field}__icontains': value}) for field in self.search_fields]
        return queryset.filter(reduce(operator.or_, conditions))


class ProjectRecordFilter(SearchFilterSet):
    """Base for records that belong to a research project"""
    project = django_filters.NumberFilter(field_name='project_id')
    status = django_filters.CharFilter(field_name='status', lookup_expr='iexact')
    created_after = django_filters.DateFilter(field_name='created_at', lookup_expr='date__gte')
    created_before = django_filters.DateFilter(field_name='created_at', lookup_expr='date__lte')
