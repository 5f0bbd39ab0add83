from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
import uuid


class ExpenseType(models.TextChoices):
    LOGISTICS = 'logistics', 'Logistics'
    FARMER_PAYMENT = 'farmer_payment', 'Farmer Payment'
    ADMIN = 'admin', 'Admin'
    PACKAGING = 'packaging', 'Packaging'
    MARKETING = 'marketing', 'Marketing'
    OTHER = 'other', 'Other'


class Expense(models.Model):
    """Money spent running the export business, optionally tied to an order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    expense_type = models.CharField(max_length=20, choices=ExpenseType.choices)
    date = models.DateField()
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    paid_to = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    # Cleared when the order is deleted
    related_order = models.ForeignKey(
        'sales.SalesOrder',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenses'
    )
    receipt_url = models.URLField(max_length=500, blank=True)
    is_approved = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['-date'], name='expenses_date_idx'),
            models.Index(fields=['expense_type'], name='expenses_type_idx'),
            models.Index(fields=['is_approved', 'amount'], name='expenses_approval_idx'),
        ]
        ordering = ['-date', 'created_at']

    def __str__(self):
        return f"{self.get_expense_type_display()}: {self.amount} to {self.paid_to}"
