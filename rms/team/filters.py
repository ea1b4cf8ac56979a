import django_filters
from rms.core.filters import SearchFilterSet
from .models import TeamMember


class TeamMemberFilter(SearchFilterSet):
    search_fields = ('name', 'email', 'expertise', 'department', 'affiliation')

    project = django_filters.NumberFilter(field_name='project_id')
    role = django_filters.CharFilter(field_name='role', lookup_expr='iexact')
    department = django_filters.CharFilter(field_name='department', lookup_expr='icontains')
    is_active = django_filters.BooleanFilter(field_name='is_active')

    class Meta:
        model = TeamMember
        fields = ['project', 'role', 'department', 'is_active', 'search']
