import django_filters
from rms.core.filters import ProjectRecordFilter
from .models import ProjectBudget


class ProjectBudgetFilter(ProjectRecordFilter):
    search_fields = ('item_name', 'item_description', 'vendor_name', 'category',
                     'purchase_order_number', 'invoice_number')

    category = django_filters.CharFilter(field_name='category', lookup_expr='iexact')
    fiscal_year = django_filters.NumberFilter(field_name='fiscal_year')
    min_amount = django_filters.NumberFilter(field_name='budgeted_amount', lookup_expr='gte')
    max_amount = django_filters.NumberFilter(field_name='budgeted_amount', lookup_expr='lte')

    class Meta:
        model = ProjectBudget
        fields = ['project', 'status', 'category', 'fiscal_year', 'search']
