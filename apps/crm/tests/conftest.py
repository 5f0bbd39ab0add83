import pytest
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.crm.models import Customer, CoffeeOrigin, Certification, CustomerStatus


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
    """Active roaster buying Yirgacheffe."""
    return Customer.objects.create(
        company_name='Nordic Roasters AB',
        contact_person='Anna Lind',
        country='Sweden',
        email='anna@nordicroasters.se',
        preferred_origin=CoffeeOrigin.YIRGACHEFFE,
        certifications_required=[Certification.ORGANIC],
        status=CustomerStatus.ACTIVE,
        assigned_sales_rep='Abebe',
        next_follow_up_date=date(2024, 3, 1),
    )


@pytest.fixture
def lead_customer(db):
    """Lead interested in Guji, no follow-up scheduled."""
    return Customer.objects.create(
        company_name='Bay Area Coffee Co',
        country='USA',
        preferred_origin=CoffeeOrigin.GUJI,
        status=CustomerStatus.LEAD,
    )
