from django.conf import settings
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.crm.models import Customer
from apps.expenses.models import Expense
from apps.invoices.models import Invoice
from apps.sales.models import SalesOrder
from .dashboard import DashboardMetrics
from .serializers import DashboardQuerySerializer, DashboardResponseSerializer


@extend_schema(
    parameters=[
        OpenApiParameter('as_of', OpenApiTypes.DATE, description='Reference date (YYYY-MM-DD), defaults to today'),
    ],
    responses={200: DashboardResponseSerializer},
    description="Get revenue, outstanding payments, expense alerts and approvals, and profit per shipment.",
    tags=['dashboard'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Recompute dashboard metrics from the current records - thin HTTP handler."""
    query_serializer = DashboardQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    today = query_serializer.validated_data.get('as_of') or timezone.localdate()

    data = DashboardMetrics.build_dashboard(
        customers=list(Customer.objects.all()),
        sales_orders=list(SalesOrder.objects.all()),
        invoices=list(Invoice.objects.select_related('customer')),
        expenses=list(Expense.objects.order_by('created_at')),
        today=today,
        top_customers_limit=settings.TOP_CUSTOMERS_LIMIT,
        overdue_alert_days=settings.OVERDUE_ALERT_DAYS,
        high_value_threshold=settings.HIGH_VALUE_EXPENSE_THRESHOLD,
    )

    return Response(DashboardResponseSerializer(data).data)
