from rest_framework import serializers
from .models import SalesOrder, ShippingStatus


# =============================================================================
# Input Serializers
# =============================================================================

class SalesOrderFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for sales order filtering.

    Query Parameters:
        customer (UUID): Filter by customer ID
        shipping_status (str): Filter by shipping status
    """

    customer = serializers.UUIDField(required=False)
    shipping_status = serializers.ChoiceField(choices=ShippingStatus.choices, required=False)


class SalesOrderInputSerializer(serializers.Serializer):
    """
    Validate input for creating or updating a sales order.

    total_amount is not accepted; it is always computed.
    """

    customer = serializers.UUIDField()
    product = serializers.CharField(max_length=200)
    grade = serializers.CharField(max_length=50, required=False, allow_blank=True)
    quantity_kg = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    shipping_status = serializers.ChoiceField(choices=ShippingStatus.choices, required=False)
    order_date = serializers.DateField()


class OrderDocumentSerializer(serializers.Serializer):
    """Document metadata attached to an order."""

    name = serializers.CharField(max_length=200)
    type = serializers.CharField(max_length=50)


# =============================================================================
# Output Serializers
# =============================================================================

class SalesOrderSerializer(serializers.ModelSerializer):
    """Sales order with its derived total and invoice link."""

    customer_name = serializers.CharField(source='customer.company_name', read_only=True)
    linked_invoice_id = serializers.UUIDField(read_only=True, allow_null=True)
    documents = OrderDocumentSerializer(many=True, read_only=True)

    class Meta:
        model = SalesOrder
        fields = [
            'id',
            'customer',
            'customer_name',
            'product',
            'grade',
            'quantity_kg',
            'unit_price',
            'total_amount',
            'shipping_status',
            'order_date',
            'linked_invoice_id',
            'documents',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
