import django_filters
from rms.core.filters import SearchFilterSet
from .models import ProjectDocument


class ProjectDocumentFilter(SearchFilterSet):
    search_fields = ('file_name', 'description', 'tags', 'document_type')

    project = django_filters.NumberFilter(field_name='project_id')
    status = django_filters.CharFilter(field_name='status', lookup_expr='iexact')
    file_type = django_filters.CharFilter(field_name='file_type', lookup_expr='icontains')
    document_type = django_filters.CharFilter(field_name='document_type', lookup_expr='iexact')
    access_level = django_filters.CharFilter(field_name='access_level', lookup_expr='iexact')
    uploaded_after = django_filters.DateFilter(field_name='upload_date', lookup_expr='date__gte')
    uploaded_before = django_filters.DateFilter(field_name='upload_date', lookup_expr='date__lte')

    class Meta:
        model = ProjectDocument
        fields = ['project', 'status', 'file_type', 'document_type', 'access_level', 'search']
