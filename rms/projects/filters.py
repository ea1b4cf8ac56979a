import django_filters
from rms.core.filters import SearchFilterSet
from .models import ResearchProject


class ResearchProjectFilter(SearchFilterSet):
    """Filter research projects by status, priority, area, dates and free text"""
    search_fields = ('title', 'description', 'keywords', 'research_area',
                     'principal_investigator', 'institution')

    status = django_filters.CharFilter(field_name='status', lookup_expr='iexact')
    priority = django_filters.CharFilter(field_name='priority', lookup_expr='iexact')
    research_area = django_filters.CharFilter(field_name='research_area', lookup_expr='icontains')
    start_after = django_filters.DateFilter(field_name='start_date', lookup_expr='gte')
    end_before = django_filters.DateFilter(field_name='end_date', lookup_expr='lte')

    class Meta:
        model = ResearchProject
        fields = ['status', 'priority', 'research_area', 'search', 'start_after', 'end_before']
