from django.utils import timezone
from rest_framework import serializers
from .models import Invoice, InvoiceStatus, PaymentMethod, PAYMENT_STATUS_CHOICES
from .status import effective_status, is_overdue


# =============================================================================
# Input Serializers
# =============================================================================

class InvoiceFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for invoice filtering.

    Query Parameters:
        status (str): Effective status, including 'overdue'
        customer (UUID): Filter by customer ID
    """

    status = serializers.ChoiceField(choices=InvoiceStatus.choices, required=False)
    customer = serializers.UUIDField(required=False)


class InvoiceCreateSerializer(serializers.Serializer):
    """Validate input for creating an invoice by hand."""

    order = serializers.UUIDField()
    amount_due = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=0, required=False
    )
    amount_paid = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=0, required=False
    )
    date_issued = serializers.DateField(required=False)
    due_date = serializers.DateField(required=False)
    payment_method = serializers.ChoiceField(
        choices=PaymentMethod.choices, required=False, allow_blank=True
    )
    date_paid = serializers.DateField(required=False, allow_null=True)


class InvoiceUpdateSerializer(serializers.Serializer):
    """
    Validate input for updating an invoice.

    PUT must send the amounts and dates; PATCH may send any subset.
    Only stored statuses are accepted; overdue is computed, never set.
    """

    amount_due = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0)
    amount_paid = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0)
    status = serializers.ChoiceField(choices=PAYMENT_STATUS_CHOICES, required=False)
    date_issued = serializers.DateField()
    due_date = serializers.DateField()
    payment_method = serializers.ChoiceField(
        choices=PaymentMethod.choices, required=False, allow_blank=True
    )
    date_paid = serializers.DateField(required=False, allow_null=True)


# =============================================================================
# Output Serializers
# =============================================================================

class InvoiceSerializer(serializers.ModelSerializer):
    """Invoice with read-time overdue information."""

    customer_name = serializers.CharField(source='customer.company_name', read_only=True)
    effective_status = serializers.SerializerMethodField()
    is_overdue = serializers.SerializerMethodField()
    balance = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Invoice
        fields = [
            'id',
            'invoice_number',
            'order',
            'customer',
            'customer_name',
            'date_issued',
            'due_date',
            'amount_due',
            'amount_paid',
            'balance',
            'payment_method',
            'date_paid',
            'status',
            'effective_status',
            'is_overdue',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def _today(self):
        return self.context.get('today') or timezone.localdate()

    def get_effective_status(self, obj) -> str:
        return effective_status(obj, self._today())

    def get_is_overdue(self, obj) -> bool:
        return is_overdue(obj, self._today())
