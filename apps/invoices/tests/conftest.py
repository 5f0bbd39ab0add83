import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.crm.models import Customer
from apps.invoices.models import Invoice, InvoiceStatus, PaymentMethod
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
def customer(db):
    return Customer.objects.create(company_name='Nordic Roasters AB', country='Sweden')


@pytest.fixture
def order(customer):
    """Order worth 4250.00."""
    return SalesOrder.objects.create(
        customer=customer,
        product='Yirgacheffe G1 Washed',
        quantity_kg=Decimal('500'),
        unit_price=Decimal('8.50'),
        order_date=date(2024, 7, 1),
    )


@pytest.fixture
def second_order(customer):
    return SalesOrder.objects.create(
        customer=customer,
        product='Guji Natural',
        quantity_kg=Decimal('100'),
        unit_price=Decimal('10'),
        order_date=date(2024, 8, 1),
    )


@pytest.fixture
def partial_invoice(order, customer):
    """4250 due, 2000 paid."""
    return Invoice.objects.create(
        order=order,
        customer=customer,
        invoice_number='INV-2024-001',
        date_issued=date(2024, 7, 2),
        due_date=date(2024, 8, 1),
        amount_due=Decimal('4250.00'),
        amount_paid=Decimal('2000.00'),
        payment_method=PaymentMethod.WIRE_TRANSFER,
        status=InvoiceStatus.PARTIAL,
        date_paid=date(2024, 7, 15),
    )
