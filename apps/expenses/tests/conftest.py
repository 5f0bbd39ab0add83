import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.crm.models import Customer
from apps.expenses.models import Expense, ExpenseType
from apps.sales.models import SalesOrder


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def sales_rep(db):
    """Create and return a back-office user."""
    return User.objects.create_user(
        email='rep@example.com',
        password='TestPass123!',
        display_name='Sales Rep',
    )


@pytest.fixture
def authenticated_client(api_client, sales_rep):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(sales_rep)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def order(db):
    customer = Customer.objects.create(company_name='Nordic Roasters AB')
    return SalesOrder.objects.create(
        customer=customer,
        product='Yirgacheffe G1 Washed',
        quantity_kg=Decimal('500'),
        unit_price=Decimal('8.50'),
        order_date=date(2024, 7, 1),
    )


@pytest.fixture
def expenses(order):
    """Four expenses across two months and two years."""
    return [
        Expense.objects.create(
            expense_type=ExpenseType.LOGISTICS,
            date=date(2024, 7, 10),
            amount=Decimal('750.00'),
            paid_to='Djibouti Freight',
            related_order=order,
        ),
        Expense.objects.create(
            expense_type=ExpenseType.FARMER_PAYMENT,
            date=date(2024, 6, 20),
            amount=Decimal('300.00'),
            paid_to='Gedeb Cooperative',
            is_approved=True,
        ),
        Expense.objects.create(
            expense_type=ExpenseType.LOGISTICS,
            date=date(2024, 7, 10),
            amount=Decimal('120.00'),
            paid_to='Addis Trucking',
        ),
        Expense.objects.create(
            expense_type=ExpenseType.ADMIN,
            date=date(2023, 12, 31),
            amount=Decimal('80.00'),
            paid_to='Office Supplies',
        ),
    ]
