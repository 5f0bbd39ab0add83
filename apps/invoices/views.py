from rest_framework import viewsets, mixins, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    InvoiceSerializer,
    InvoiceFilterSerializer,
    InvoiceCreateSerializer,
    InvoiceUpdateSerializer,
)
from apps.invoices.services import (
    UNSET,
    create_invoice,
    get_invoice_by_id,
    update_invoice,
    get_invoices,
    # Exceptions
    InvoiceNotFoundError,
    SalesOrderNotFoundError,
    InvoiceAlreadyExistsError,
    InvalidInvoiceDataError,
)


class InvoicePagination(PageNumberPagination):
    """Custom pagination for invoices."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(tags=['invoices'])
class InvoiceViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for invoices. Invoices are never deleted.

    list: Get invoices (filterable by effective status and customer)
    create: Create an invoice by hand for a sales order
    retrieve: Get an invoice
    update: Update amounts, dates, payment method or status
    partial_update: Partially update an invoice
    """

    serializer_class = InvoiceSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = InvoicePagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        """Filter invoices using input serializer validation."""
        filter_serializer = InvoiceFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return get_invoices(
            status=params.get('status'),
            customer_id=params.get('customer'),
        )

    @extend_schema(
        parameters=[
            OpenApiParameter('status', str, description='unpaid, partial, paid or overdue'),
            OpenApiParameter('customer', str, description='Customer ID'),
        ]
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        try:
            invoice = get_invoice_by_id(invoice_id=self.kwargs['pk'])
        except InvoiceNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(InvoiceSerializer(invoice).data)

    @extend_schema(request=InvoiceCreateSerializer, responses={201: InvoiceSerializer})
    def create(self, request, *args, **kwargs):
        """Create an invoice by hand. Status is derived from the amounts."""
        serializer = InvoiceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        try:
            invoice = create_invoice(order_id=data.pop('order'), **data)
        except SalesOrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvoiceAlreadyExistsError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except InvalidInvoiceDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(InvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=InvoiceUpdateSerializer, responses={200: InvoiceSerializer})
    def update(self, request, *args, **kwargs):
        """Update an invoice. Amount changes re-derive the status."""
        partial = kwargs.pop('partial', False)
        serializer = InvoiceUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        date_paid = data.pop('date_paid', UNSET)

        try:
            invoice = update_invoice(
                invoice_id=self.kwargs['pk'],
                date_paid=date_paid,
                **data,
            )
        except InvoiceNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidInvoiceDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(InvoiceSerializer(invoice).data)
