from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models


class ProjectBudget(models.Model):
    """One budget line of a research project"""
    STATUS_CHOICES = [
        ('PENDING', 'Pending'),
        ('APPROVED', 'Approved'),
        ('PAID', 'Paid'),
        ('CANCELLED', 'Cancelled'),
    ]

    project = models.ForeignKey('projects.ResearchProject', on_delete=models.CASCADE, related_name='budget_items')
    item_name = models.CharField(max_length=100)
    item_description = models.TextField(blank=True)
    category = models.CharField(max_length=50, blank=True)
    budgeted_amount = models.DecimalField(max_digits=14, decimal_places=2,
                                          validators=[MinValueValidator(Decimal('0.00'))])
    actual_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'),
                                        validators=[MinValueValidator(Decimal('0.00'))])
    vendor_name = models.CharField(max_length=200, blank=True)
    purchase_order_number = models.CharField(max_length=100, blank=True)
    invoice_number = models.CharField(max_length=100, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='PENDING')
    fiscal_year = models.PositiveSmallIntegerField(null=True, blank=True)
    funding_source = models.CharField(max_length=200, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'project_budgets'
        ordering = ['category', 'item_name', 'id']
        indexes = [
            models.Index(fields=['project', 'category'], name='budgets_project_category_idx'),
        ]

    def __str__(self):
        return self.item_name

    @property
    def remaining_amount(self):
        return self.budgeted_amount - self.actual_amount
