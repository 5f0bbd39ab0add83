import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.crm.models import Customer, CustomerStatus
from apps.expenses.models import Expense, ExpenseType
from apps.invoices.models import Invoice, InvoiceStatus
from apps.sales.models import SalesOrder


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client(api_client, db):
    """Return an authenticated API client using JWT."""
    user = User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Owner',
    )
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def business(db):
    """
    One paying customer, one lead.

    Order A: 4250 invoiced, 2000 paid, due 2024-08-01.
    Order B: not invoiced, 200 approved logistics cost.
    """
    roaster = Customer.objects.create(company_name='Nordic Roasters AB', status=CustomerStatus.ACTIVE)
    lead = Customer.objects.create(company_name='Bay Area Coffee Co', status=CustomerStatus.LEAD)

    order_a = SalesOrder.objects.create(
        customer=roaster,
        product='Yirgacheffe G1 Washed',
        quantity_kg=Decimal('500'),
        unit_price=Decimal('8.50'),
        order_date=date(2024, 7, 1),
    )
    order_b = SalesOrder.objects.create(
        customer=roaster,
        product='Guji Natural',
        quantity_kg=Decimal('100'),
        unit_price=Decimal('10'),
        order_date=date(2024, 7, 5),
    )
    invoice = Invoice.objects.create(
        order=order_a,
        customer=roaster,
        invoice_number='INV-2024-001',
        date_issued=date(2024, 7, 2),
        due_date=date(2024, 8, 1),
        amount_due=Decimal('4250.00'),
        amount_paid=Decimal('2000.00'),
        status=InvoiceStatus.PARTIAL,
    )
    Expense.objects.create(
        expense_type=ExpenseType.LOGISTICS,
        date=date(2024, 9, 3),
        amount=Decimal('200.00'),
        paid_to='Addis Trucking',
        related_order=order_b,
        is_approved=True,
    )
    Expense.objects.create(
        expense_type=ExpenseType.MARKETING,
        date=date(2024, 9, 4),
        amount=Decimal('900.00'),
        paid_to='Coffee Expo',
    )
    return {
        'roaster': roaster,
        'lead': lead,
        'order_a': order_a,
        'order_b': order_b,
        'invoice': invoice,
    }
