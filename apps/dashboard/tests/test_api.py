import pytest
from datetime import date
from decimal import Decimal
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from apps.expenses.models import Expense, ExpenseType


@pytest.mark.django_db
class TestDashboardAPI:
    """Tests for /api/dashboard/."""

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('dashboard:dashboard'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_empty_dashboard(self, authenticated_client):
        response = authenticated_client.get(reverse('dashboard:dashboard'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['monthly_revenue'] == '0.00'
        assert response.data['top_customers'] == []
        assert response.data['profit_per_shipment'] == []

    def test_metrics(self, authenticated_client, business):
        response = authenticated_client.get(
            reverse('dashboard:dashboard'), {'as_of': '2024-09-15'}
        )

        data = response.data
        assert response.status_code == status.HTTP_200_OK
        assert data['as_of'] == '2024-09-15'
        assert data['monthly_revenue'] == '2000.00'
        assert data['outstanding_payments'] == '2250.00'
        assert data['approved_expenses_this_month'] == '200.00'
        assert data['active_customers'] == 1

        assert len(data['top_customers']) == 1
        assert data['top_customers'][0]['name'] == 'Nordic Roasters AB'
        assert data['top_customers'][0]['total_sales'] == '2000.00'

        assert [a['invoice_number'] for a in data['overdue_alerts']] == ['INV-2024-001']
        assert data['overdue_alerts'][0]['customer_name'] == 'Nordic Roasters AB'
        assert data['overdue_alerts'][0]['balance'] == '2250.00'

        assert [e['paid_to'] for e in data['high_value_expenses']] == ['Coffee Expo']

        profits = {p['product']: p['profit'] for p in data['profit_per_shipment']}
        assert profits == {'Yirgacheffe G1 Washed': '2000.00', 'Guji Natural': '-200.00'}

    def test_not_yet_alerted(self, authenticated_client, business):
        response = authenticated_client.get(
            reverse('dashboard:dashboard'), {'as_of': '2024-08-20'}
        )

        assert response.data['overdue_alerts'] == []

    def test_recent_high_value_approvals(self, authenticated_client, business):
        older = Expense.objects.create(
            expense_type=ExpenseType.PACKAGING,
            date=date(2024, 9, 10),
            amount=Decimal('650.00'),
            paid_to='Jute Bag Supply',
            is_approved=True,
        )
        newer = Expense.objects.create(
            expense_type=ExpenseType.LOGISTICS,
            date=date(2024, 9, 1),
            amount=Decimal('1200.00'),
            paid_to='Djibouti Freight',
            is_approved=True,
        )

        response = authenticated_client.get(
            reverse('dashboard:dashboard'), {'as_of': '2024-09-15'}
        )

        assert [e['id'] for e in response.data['recent_high_value_approvals']] == [
            str(newer.id), str(older.id),
        ]

    @override_settings(HIGH_VALUE_EXPENSE_THRESHOLD=1000)
    def test_threshold_from_settings(self, authenticated_client, business):
        response = authenticated_client.get(
            reverse('dashboard:dashboard'), {'as_of': '2024-09-15'}
        )

        assert response.data['high_value_expenses'] == []

    def test_invalid_as_of(self, authenticated_client):
        response = authenticated_client.get(
            reverse('dashboard:dashboard'), {'as_of': 'yesterday'}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
