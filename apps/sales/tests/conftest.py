import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.crm.models import Customer, CustomerStatus
from apps.sales.models import SalesOrder, ShippingStatus


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
    return Customer.objects.create(
        company_name='Nordic Roasters AB',
        country='Sweden',
        status=CustomerStatus.ACTIVE,
    )


@pytest.fixture
def other_customer(db):
    return Customer.objects.create(company_name='Bay Area Coffee Co', country='USA')


@pytest.fixture
def order(customer):
    """500 kg of Yirgacheffe G1 at 8.50/kg."""
    return SalesOrder.objects.create(
        customer=customer,
        product='Yirgacheffe G1 Washed',
        grade='G1',
        quantity_kg=Decimal('500'),
        unit_price=Decimal('8.50'),
        shipping_status=ShippingStatus.SHIPPED,
        order_date=date(2024, 7, 1),
    )
