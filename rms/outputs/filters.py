import django_filters
from rms.core.filters import SearchFilterSet, ProjectRecordFilter
from .models import ProjectPatent, ProjectPublication


class ProjectPatentFilter(SearchFilterSet):
    search_fields = ('title', 'abstract', 'patent_number', 'inventors', 'assignee')

    project = django_filters.NumberFilter(field_name='project_id')
    status = django_filters.CharFilter(field_name='status', lookup_expr='iexact')
    type = django_filters.CharFilter(field_name='type', lookup_expr='iexact')
    inventor = django_filters.CharFilter(field_name='inventors', lookup_expr='icontains')
    filed_after = django_filters.DateFilter(field_name='filing_date', lookup_expr='gte')
    filed_before = django_filters.DateFilter(field_name='filing_date', lookup_expr='lte')

    class Meta:
        model = ProjectPatent
        fields = ['project', 'status', 'type', 'inventor', 'search']


class ProjectPublicationFilter(ProjectRecordFilter):
    search_fields = ('title', 'abstract', 'authors', 'keywords', 'journal_name', 'conference_name', 'doi')

    type = django_filters.CharFilter(field_name='type', lookup_expr='iexact')
    author = django_filters.CharFilter(field_name='authors', lookup_expr='icontains')
    year = django_filters.NumberFilter(field_name='year')
    open_access = django_filters.CharFilter(field_name='open_access', lookup_expr='iexact')

    class Meta:
        model = ProjectPublication
        fields = ['project', 'status', 'type', 'author', 'year', 'open_access', 'search']
