from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
import uuid


class InvoiceStatus(models.TextChoices):
    UNPAID = 'unpaid', 'Unpaid'
    PARTIAL = 'partial', 'Partial'
    PAID = 'paid', 'Paid'
    # Display only, never persisted
    OVERDUE = 'overdue', 'Overdue'


# Statuses that can be stored on an invoice row
PAYMENT_STATUS_CHOICES = [
    (InvoiceStatus.UNPAID.value, InvoiceStatus.UNPAID.label),
    (InvoiceStatus.PARTIAL.value, InvoiceStatus.PARTIAL.label),
    (InvoiceStatus.PAID.value, InvoiceStatus.PAID.label),
]


class PaymentMethod(models.TextChoices):
    LETTER_OF_CREDIT = 'letter_of_credit', 'Letter of Credit'
    WIRE_TRANSFER = 'wire_transfer', 'Wire Transfer'
    CASH = 'cash', 'Cash'


class Invoice(models.Model):
    """Bill for a sales order, tracking what the customer has paid."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Cleared when the order is deleted; the invoice itself is kept
    order = models.OneToOneField(
        'sales.SalesOrder',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='invoice'
    )
    customer = models.ForeignKey(
        'crm.Customer',
        on_delete=models.PROTECT,
        related_name='invoices'
    )

    invoice_number = models.CharField(max_length=32, unique=True)
    date_issued = models.DateField()
    due_date = models.DateField()

    amount_due = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    amount_paid = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        blank=True
    )
    date_paid = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=PAYMENT_STATUS_CHOICES,
        default=InvoiceStatus.UNPAID
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'invoices'
        indexes = [
            models.Index(fields=['status', 'due_date'], name='invoices_status_due_idx'),
            models.Index(fields=['customer'], name='invoices_customer_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return self.invoice_number

    @property
    def balance(self) -> Decimal:
        return self.amount_due - self.amount_paid


class InvoiceSequence(models.Model):
    """Per-year counter handing out invoice numbers under a row lock."""

    year = models.PositiveIntegerField(primary_key=True)
    last_value = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'invoice_sequences'

    def __str__(self):
        return f"{self.year}: {self.last_value}"
