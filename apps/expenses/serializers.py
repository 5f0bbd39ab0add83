from decimal import Decimal
from rest_framework import serializers
from .models import Expense, ExpenseType
from .services import is_high_value


# =============================================================================
# Input Serializers
# =============================================================================

class ExpenseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for expense filtering.

    Query Parameters:
        expense_type (str): Filter by expense type
        date (str): 'YYYY' or 'YYYY-MM'
        order (UUID): Filter by related sales order
    """

    expense_type = serializers.ChoiceField(choices=ExpenseType.choices, required=False)
    date = serializers.RegexField(
        regex=r'^\d{4}(-\d{2})?$',
        required=False,
        error_messages={'invalid': 'Use YYYY or YYYY-MM.'},
    )
    order = serializers.UUIDField(required=False)


class ExpenseInputSerializer(serializers.Serializer):
    """Validate input for creating or updating an expense."""

    expense_type = serializers.ChoiceField(choices=ExpenseType.choices)
    date = serializers.DateField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    paid_to = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    related_order = serializers.UUIDField(required=False, allow_null=True)
    receipt_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    is_approved = serializers.BooleanField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class ExpenseSerializer(serializers.ModelSerializer):
    """Expense with its high-value flag."""

    related_order_product = serializers.CharField(
        source='related_order.product', read_only=True, default=None
    )
    is_high_value = serializers.SerializerMethodField()

    class Meta:
        model = Expense
        fields = [
            'id',
            'expense_type',
            'date',
            'amount',
            'paid_to',
            'description',
            'related_order',
            'related_order_product',
            'receipt_url',
            'is_approved',
            'is_high_value',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_is_high_value(self, obj) -> bool:
        return is_high_value(obj)


class ExpenseSummarySerializer(serializers.Serializer):
    """Totals per month and per year over the filtered expenses."""

    monthly = serializers.DictField(
        child=serializers.DecimalField(max_digits=14, decimal_places=2)
    )
    yearly = serializers.DictField(
        child=serializers.DecimalField(max_digits=14, decimal_places=2)
    )
