import django_filters
from django.db.models import Q
from django.utils import timezone
from rms.core.filters import ProjectRecordFilter
from .models import ProjectTask, ProjectMilestone, ProjectDeliverable


class ProjectTaskFilter(ProjectRecordFilter):
    search_fields = ('title', 'description', 'tags', 'notes')

    priority = django_filters.CharFilter(field_name='priority', lookup_expr='iexact')
    assigned_to = django_filters.NumberFilter(field_name='assigned_to_id')
    due_before = django_filters.DateFilter(field_name='due_date', lookup_expr='lte')
    due_after = django_filters.DateFilter(field_name='due_date', lookup_expr='gte')
    overdue = django_filters.BooleanFilter(method='filter_overdue')

    class Meta:
        model = ProjectTask
        fields = ['project', 'status', 'priority', 'assigned_to', 'search']

    def filter_overdue(self, queryset, name, value):
        condition = (
            Q(due_date__lt=timezone.localdate())
            & Q(due_date__isnull=False)
            & ~Q(status__in=['COMPLETED', 'CANCELLED'])
        )
        return queryset.filter(condition) if value else queryset.exclude(condition)


class ProjectMilestoneFilter(ProjectRecordFilter):
    search_fields = ('title', 'description', 'deliverables', 'responsible_person')

    due_before = django_filters.DateFilter(field_name='due_date', lookup_expr='lte')
    due_after = django_filters.DateFilter(field_name='due_date', lookup_expr='gte')

    class Meta:
        model = ProjectMilestone
        fields = ['project', 'status', 'search']


class ProjectDeliverableFilter(ProjectRecordFilter):
    search_fields = ('title', 'description', 'type', 'responsible_person')

    type = django_filters.CharFilter(field_name='type', lookup_expr='iexact')
    approval_status = django_filters.CharFilter(field_name='approval_status', lookup_expr='iexact')

    class Meta:
        model = ProjectDeliverable
        fields = ['project', 'status', 'type', 'approval_status', 'search']
