from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    ExpenseSerializer,
    ExpenseFilterSerializer,
    ExpenseInputSerializer,
    ExpenseSummarySerializer,
)
from apps.expenses.services import (
    UNSET,
    create_expense,
    get_expense_by_id,
    update_expense,
    delete_expense,
    get_expenses,
    toggle_expense_approval,
    summarize_expenses_by_month,
    summarize_expenses_by_year,
    # Exceptions
    ExpenseNotFoundError,
    SalesOrderNotFoundError,
    InvalidExpenseDataError,
)

FILTER_PARAMETERS = [
    OpenApiParameter('expense_type', str, description='Expense type'),
    OpenApiParameter('date', str, description='YYYY or YYYY-MM'),
    OpenApiParameter('order', str, description='Related sales order ID'),
]


class ExpensePagination(PageNumberPagination):
    """Custom pagination for expenses."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(tags=['expenses'])
class ExpenseViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Expense CRUD operations.

    list: Get expenses newest first (filterable by type, date, order)
    create: Record an expense
    retrieve: Get an expense
    update: Update an expense
    partial_update: Partially update an expense
    destroy: Delete an expense
    """

    serializer_class = ExpenseSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ExpensePagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        """Filter expenses using input serializer validation."""
        filter_serializer = ExpenseFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return get_expenses(
            expense_type=params.get('expense_type'),
            date_prefix=params.get('date'),
            related_order_id=params.get('order'),
        )

    @extend_schema(parameters=FILTER_PARAMETERS)
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        try:
            expense = get_expense_by_id(expense_id=self.kwargs['pk'])
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(ExpenseSerializer(expense).data)

    @extend_schema(request=ExpenseInputSerializer, responses={201: ExpenseSerializer})
    def create(self, request, *args, **kwargs):
        """Record an expense."""
        serializer = ExpenseInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        try:
            expense = create_expense(
                expense_date=data.pop('date'),
                related_order_id=data.pop('related_order', None),
                **data,
            )
        except (InvalidExpenseDataError, SalesOrderNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ExpenseInputSerializer, responses={200: ExpenseSerializer})
    def update(self, request, *args, **kwargs):
        """Update an expense. PATCH leaves omitted fields unchanged."""
        partial = kwargs.pop('partial', False)
        serializer = ExpenseInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        try:
            expense = update_expense(
                expense_id=self.kwargs['pk'],
                expense_date=data.pop('date', None),
                related_order_id=data.pop('related_order', UNSET),
                **data,
            )
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (InvalidExpenseDataError, SalesOrderNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseSerializer(expense).data)

    def destroy(self, request, *args, **kwargs):
        """Delete an expense."""
        try:
            delete_expense(expense_id=self.kwargs['pk'])
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: ExpenseSerializer})
    @action(detail=True, methods=['post'])
    def toggle_approval(self, request, pk=None):
        """
        Flip the approval flag of an expense.

        POST /api/expenses/{id}/toggle_approval/
        """
        try:
            expense = toggle_expense_approval(expense_id=pk)
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(ExpenseSerializer(expense).data)

    @extend_schema(parameters=FILTER_PARAMETERS, responses={200: ExpenseSummarySerializer})
    @action(detail=False, methods=['get'])
    def summary(self, request):
        """
        Monthly and yearly totals of the filtered expenses.

        GET /api/expenses/summary/?expense_type=logistics&date=2024
        """
        expenses = list(self.get_queryset())
        serializer = ExpenseSummarySerializer({
            'monthly': summarize_expenses_by_month(expenses),
            'yearly': summarize_expenses_by_year(expenses),
        })
        return Response(serializer.data)
