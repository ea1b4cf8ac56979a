from django.contrib import admin
from .models import ProjectBudget


@admin.register(ProjectBudget)
class ProjectBudgetAdmin(admin.ModelAdmin):
    list_display = ['item_name', 'project', 'category', 'budgeted_amount', 'actual_amount', 'status', 'fiscal_year']
    list_filter = ['status', 'category', 'fiscal_year']
    search_fields = ['item_name', 'vendor_name', 'purchase_order_number', 'invoice_number']
    ordering = ['project', 'category', 'item_name']
