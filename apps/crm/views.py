from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    CustomerSerializer,
    CustomerListSerializer,
    CustomerFilterSerializer,
    InteractionSerializer,
    InteractionCreateSerializer,
)
from apps.crm.services import (
    UNSET,
    create_customer,
    get_customer_by_id,
    update_customer,
    delete_customer,
    get_customers,
    log_interaction,
    get_customer_interactions,
    # Exceptions
    CustomerNotFoundError,
    InvalidCustomerDataError,
    InvalidInteractionError,
    CustomerHasOrdersError,
)


class CustomerPagination(PageNumberPagination):
    """Custom pagination for customers."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(tags=['crm'])
class CustomerViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Customer CRUD operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get customers (filterable by status, origin, follow-up)
    create: Create a new customer
    retrieve: Get a customer with its interaction history
    update: Update a customer
    partial_update: Partially update a customer
    destroy: Delete a customer without sales orders
    """

    serializer_class = CustomerSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = CustomerPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        """Filter customers using input serializer validation."""
        filter_serializer = CustomerFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return get_customers(
            status=params.get('status'),
            preferred_origin=params.get('origin'),
            follow_up_overdue=params.get('follow_up_overdue'),
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return CustomerListSerializer
        return CustomerSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter('status', str, description='Customer status'),
            OpenApiParameter('origin', str, description='Preferred coffee origin'),
            OpenApiParameter('follow_up_overdue', bool, description='Follow-up date has passed'),
        ]
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        try:
            customer = get_customer_by_id(customer_id=self.kwargs['pk'])
        except CustomerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(CustomerSerializer(customer).data)

    def create(self, request, *args, **kwargs):
        """Create a new customer."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            customer = create_customer(**serializer.validated_data)
        except InvalidCustomerDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CustomerSerializer(customer).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update a customer. PATCH leaves omitted fields unchanged."""
        partial = kwargs.pop('partial', False)
        serializer = CustomerSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        next_follow_up_date = data.pop('next_follow_up_date', UNSET)

        try:
            customer = update_customer(
                customer_id=self.kwargs['pk'],
                next_follow_up_date=next_follow_up_date,
                **data,
            )
        except CustomerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidCustomerDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CustomerSerializer(customer).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a customer and its interactions."""
        try:
            delete_customer(customer_id=self.kwargs['pk'])
        except CustomerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except CustomerHasOrdersError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=InteractionCreateSerializer,
        responses={200: InteractionSerializer(many=True), 201: InteractionSerializer},
    )
    @action(detail=True, methods=['get', 'post'])
    def interactions(self, request, pk=None):
        """
        List or append customer interactions.

        GET  /api/crm/customers/{id}/interactions/
        POST /api/crm/customers/{id}/interactions/
        Body: {"date": "2024-03-01", "type": "call", "notes": "optional"}
        """
        if request.method == 'GET':
            try:
                interactions = get_customer_interactions(customer_id=pk)
            except CustomerNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
            return Response(InteractionSerializer(interactions, many=True).data)

        serializer = InteractionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            interaction = log_interaction(
                customer_id=pk,
                interaction_date=serializer.validated_data['date'],
                interaction_type=serializer.validated_data['type'],
                notes=serializer.validated_data['notes'],
            )
        except CustomerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidInteractionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(InteractionSerializer(interaction).data, status=status.HTTP_201_CREATED)
