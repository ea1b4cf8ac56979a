import django_filters
from rms.core.filters import ProjectRecordFilter
from .models import ProjectRisk


class ProjectRiskFilter(ProjectRecordFilter):
    search_fields = ('title', 'description', 'category', 'mitigation_plan', 'owner')

    category = django_filters.CharFilter(field_name='category', lookup_expr='iexact')
    risk_level = django_filters.CharFilter(field_name='risk_level', lookup_expr='iexact')
    min_score = django_filters.NumberFilter(field_name='risk_score', lookup_expr='gte')

    class Meta:
        model = ProjectRisk
        fields = ['project', 'status', 'category', 'risk_level', 'search']
