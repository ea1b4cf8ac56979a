from rest_framework import serializers
from .models import ProjectBudget


class ProjectBudgetSerializer(serializers.ModelSerializer):
    project_title = serializers.CharField(source='project.title', read_only=True)
    remaining_amount = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = ProjectBudget
        fields = ['id', 'project', 'project_title', 'item_name', 'item_description', 'category',
                  'budgeted_amount', 'actual_amount', 'remaining_amount', 'vendor_name',
                  'purchase_order_number', 'invoice_number', 'status', 'fiscal_year',
                  'funding_source', 'notes', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']
