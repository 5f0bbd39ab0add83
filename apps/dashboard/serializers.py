from rest_framework import serializers
from apps.expenses.models import Expense
from apps.invoices.models import Invoice


# =============================================================================
# Input Serializers
# =============================================================================

class DashboardQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for the dashboard.

    Query Parameters:
        as_of (date): Reference date for month and overdue checks (default today)
    """

    as_of = serializers.DateField(required=False)


# =============================================================================
# Response Serializers
# =============================================================================

class TopCustomerSerializer(serializers.Serializer):
    """Nested serializer for top customers in dashboard."""
    customer_id = serializers.UUIDField()
    name = serializers.CharField()
    total_sales = serializers.DecimalField(max_digits=14, decimal_places=2)


class ShipmentProfitSerializer(serializers.Serializer):
    """Nested serializer for profit per shipment in dashboard."""
    order_id = serializers.UUIDField()
    product = serializers.CharField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    profit = serializers.DecimalField(max_digits=14, decimal_places=2)


class OverdueAlertSerializer(serializers.ModelSerializer):
    """Invoice long past its due date."""
    customer_name = serializers.CharField(source='customer.company_name')
    balance = serializers.DecimalField(max_digits=14, decimal_places=2)

    class Meta:
        model = Invoice
        fields = ['id', 'invoice_number', 'customer', 'customer_name', 'balance', 'due_date']
        read_only_fields = fields


class HighValueExpenseSerializer(serializers.ModelSerializer):
    """Expense above the high-value threshold."""

    class Meta:
        model = Expense
        fields = ['id', 'expense_type', 'date', 'amount', 'paid_to', 'description']
        read_only_fields = fields


class DashboardResponseSerializer(serializers.Serializer):
    """Response serializer for the dashboard."""
    as_of = serializers.DateField()
    monthly_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    outstanding_payments = serializers.DecimalField(max_digits=14, decimal_places=2)
    approved_expenses_this_month = serializers.DecimalField(max_digits=14, decimal_places=2)
    active_customers = serializers.IntegerField()
    top_customers = TopCustomerSerializer(many=True)
    overdue_alerts = OverdueAlertSerializer(many=True)
    high_value_expenses = HighValueExpenseSerializer(many=True)
    recent_high_value_approvals = HighValueExpenseSerializer(many=True)
    profit_per_shipment = ShipmentProfitSerializer(many=True)
