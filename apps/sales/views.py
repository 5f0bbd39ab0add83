from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    SalesOrderSerializer,
    SalesOrderFilterSerializer,
    SalesOrderInputSerializer,
    OrderDocumentSerializer,
)
from apps.sales.services import (
    create_sales_order,
    get_sales_order_by_id,
    update_sales_order,
    delete_sales_order,
    get_sales_orders,
    add_order_document,
    # Exceptions
    SalesOrderNotFoundError,
    CustomerNotFoundError,
    InvalidSalesOrderDataError,
)
from apps.invoices.serializers import InvoiceSerializer
from apps.invoices.services import (
    generate_invoice_for_order,
    InvoiceAlreadyExistsError,
    SalesOrderNotFoundError as InvoiceOrderNotFoundError,
)


class SalesOrderPagination(PageNumberPagination):
    """Custom pagination for sales orders."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(tags=['sales'])
class SalesOrderViewSet(viewsets.ModelViewSet):
    """
    ViewSet for SalesOrder CRUD operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get orders (filterable by customer and shipping status)
    create: Create an order; total is computed
    retrieve: Get an order
    update: Update an order; total is recomputed
    partial_update: Partially update an order
    destroy: Delete an order; its invoice is kept
    """

    serializer_class = SalesOrderSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SalesOrderPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        """Filter orders using input serializer validation."""
        filter_serializer = SalesOrderFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return get_sales_orders(
            customer_id=params.get('customer'),
            shipping_status=params.get('shipping_status'),
        )

    @extend_schema(
        parameters=[
            OpenApiParameter('customer', str, description='Customer ID'),
            OpenApiParameter('shipping_status', str, description='pending, shipped or delivered'),
        ]
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        try:
            order = get_sales_order_by_id(order_id=self.kwargs['pk'])
        except SalesOrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(SalesOrderSerializer(order).data)

    @extend_schema(request=SalesOrderInputSerializer, responses={201: SalesOrderSerializer})
    def create(self, request, *args, **kwargs):
        """Create a sales order."""
        serializer = SalesOrderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        try:
            order = create_sales_order(customer_id=data.pop('customer'), **data)
        except CustomerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except InvalidSalesOrderDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SalesOrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=SalesOrderInputSerializer, responses={200: SalesOrderSerializer})
    def update(self, request, *args, **kwargs):
        """Update a sales order. PATCH leaves omitted fields unchanged."""
        partial = kwargs.pop('partial', False)
        serializer = SalesOrderInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        try:
            order = update_sales_order(
                order_id=self.kwargs['pk'],
                customer_id=data.pop('customer', None),
                **data,
            )
        except SalesOrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (CustomerNotFoundError, InvalidSalesOrderDataError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SalesOrderSerializer(order).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a sales order."""
        try:
            delete_sales_order(order_id=self.kwargs['pk'])
        except SalesOrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={201: InvoiceSerializer}, tags=['invoices'])
    @action(detail=True, methods=['post'])
    def generate_invoice(self, request, pk=None):
        """
        Generate the invoice for this order.

        POST /api/sales/orders/{id}/generate_invoice/
        Returns 409 if the order already has an invoice.
        """
        try:
            invoice = generate_invoice_for_order(order_id=pk)
        except InvoiceOrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvoiceAlreadyExistsError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(InvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=OrderDocumentSerializer, responses={201: SalesOrderSerializer})
    @action(detail=True, methods=['post'])
    def documents(self, request, pk=None):
        """
        Attach document metadata to this order.

        POST /api/sales/orders/{id}/documents/
        Body: {"name": "bill_of_lading.pdf", "type": "Bill of Lading"}
        """
        serializer = OrderDocumentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = add_order_document(
                order_id=pk,
                name=serializer.validated_data['name'],
                document_type=serializer.validated_data['type'],
            )
        except SalesOrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidSalesOrderDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SalesOrderSerializer(order).data, status=status.HTTP_201_CREATED)
