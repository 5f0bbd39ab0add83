from decimal import Decimal, ROUND_HALF_UP
from django.core.exceptions import ObjectDoesNotExist
from django.core.validators import MinValueValidator
from django.db import models
import uuid


CENTS = Decimal('0.01')


class ShippingStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    SHIPPED = 'shipped', 'Shipped'
    DELIVERED = 'delivered', 'Delivered'


def compute_order_total(quantity_kg, unit_price) -> Decimal:
    """Line total rounded half-up to cents."""
    total = Decimal(str(quantity_kg)) * Decimal(str(unit_price))
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


class SalesOrder(models.Model):
    """Green coffee lot sold to a customer."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    customer = models.ForeignKey(
        'crm.Customer',
        on_delete=models.PROTECT,
        related_name='sales_orders'
    )

    # Lot
    product = models.CharField(max_length=200)
    grade = models.CharField(max_length=50, blank=True)
    quantity_kg = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text="USD per kg"
    )
    # Always quantity_kg * unit_price; recomputed in save()
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, editable=False)

    shipping_status = models.CharField(
        max_length=20,
        choices=ShippingStatus.choices,
        default=ShippingStatus.PENDING
    )
    order_date = models.DateField()

    # [{"name": "...", "type": "..."}], metadata only
    documents = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'sales_orders'
        indexes = [
            models.Index(fields=['customer', 'order_date'], name='orders_customer_idx'),
            models.Index(fields=['shipping_status'], name='orders_shipping_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.product} ({self.quantity_kg} kg) for {self.customer}"

    def save(self, *args, **kwargs):
        self.total_amount = compute_order_total(self.quantity_kg, self.unit_price)
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'total_amount' not in update_fields:
            kwargs['update_fields'] = list(update_fields) + ['total_amount']
        super().save(*args, **kwargs)

    @property
    def linked_invoice_id(self):
        """Id of the invoice generated for this order, if any."""
        try:
            return self.invoice.id
        except ObjectDoesNotExist:
            return None
