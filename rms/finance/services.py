"""Budget aggregation shared by the budget and analytics endpoints"""
from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Sum
from django.db.models.functions import Coalesce

from .models import ProjectBudget

ZERO = Decimal('0.00')


def utilization_percentage(total_budgeted, total_actual):
    """actual / budgeted as a percentage rounded to 2 places; 0 when nothing is budgeted"""
    if not total_budgeted:
        return 0.0
    percentage = (Decimal(total_actual) / Decimal(total_budgeted) * 100).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    return float(percentage)


def budget_summary(project):
    """Totals and per-category breakdown of a project's budget lines, cancelled lines excluded"""
    lines = ProjectBudget.objects.filter(project=project).exclude(status='CANCELLED')
    totals = lines.aggregate(
        budgeted=Coalesce(Sum('budgeted_amount'), ZERO),
        actual=Coalesce(Sum('actual_amount'), ZERO),
    )
    by_category = (
        lines.values('category')
        .annotate(budgeted=Coalesce(Sum('budgeted_amount'), ZERO), actual=Coalesce(Sum('actual_amount'), ZERO))
        .order_by('category')
    )

    return {
        'project_id': project.id,
        'total_budgeted': float(totals['budgeted']),
        'total_actual': float(totals['actual']),
        'remaining': float(totals['budgeted'] - totals['actual']),
        'utilization_percentage': utilization_percentage(totals['budgeted'], totals['actual']),
        'line_count': lines.count(),
        'by_category': [
            {
                'category': row['category'] or 'Uncategorized',
                'budgeted': float(row['budgeted']),
                'actual': float(row['actual']),
            }
            for row in by_category
        ],
    }
