import pytest
from datetime import date, timedelta
from decimal import Decimal
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.invoices.models import Invoice


@pytest.mark.django_db
class TestInvoiceAPI:
    """Tests for /api/invoices/."""

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('invoices:invoice-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_includes_display_fields(self, authenticated_client, partial_invoice):
        response = authenticated_client.get(reverse('invoices:invoice-list'))

        assert response.status_code == status.HTTP_200_OK
        item = response.data['results'][0]
        assert item['invoice_number'] == 'INV-2024-001'
        assert item['status'] == 'partial'
        assert item['balance'] == '2250.00'
        # Due 2024-08-01, long past
        assert item['effective_status'] == 'overdue'
        assert item['is_overdue'] is True

    def test_filter_overdue(self, authenticated_client, partial_invoice):
        response = authenticated_client.get(
            reverse('invoices:invoice-list'), {'status': 'overdue'}
        )
        assert response.data['count'] == 1

        response = authenticated_client.get(
            reverse('invoices:invoice-list'), {'status': 'partial'}
        )
        assert response.data['count'] == 0

    def test_filter_rejects_unknown_status(self, authenticated_client):
        response = authenticated_client.get(
            reverse('invoices:invoice-list'), {'status': 'void'}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_invoice(self, authenticated_client, order):
        response = authenticated_client.post(
            reverse('invoices:invoice-list'),
            {'order': str(order.id), 'amount_paid': '4250.00', 'payment_method': 'letter_of_credit'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'paid'
        assert response.data['date_paid'] == timezone.localdate().isoformat()
        assert response.data['amount_due'] == '4250.00'

    def test_create_invoice_for_invoiced_order(self, authenticated_client, order, partial_invoice):
        response = authenticated_client.post(
            reverse('invoices:invoice-list'), {'order': str(order.id)}, format='json'
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_update_amount_paid(self, authenticated_client, partial_invoice):
        partial_invoice.due_date = timezone.localdate() + timedelta(days=10)
        partial_invoice.save()

        response = authenticated_client.patch(
            reverse('invoices:invoice-detail', args=[partial_invoice.id]),
            {'amount_paid': '4250.00'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'paid'
        assert response.data['effective_status'] == 'paid'
        assert response.data['date_paid'] == '2024-07-15'

    def test_put_requires_full_invoice(self, authenticated_client, partial_invoice):
        response = authenticated_client.put(
            reverse('invoices:invoice-detail', args=[partial_invoice.id]),
            {'amount_paid': '4250.00'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'amount_due' in response.data
        partial_invoice.refresh_from_db()
        assert partial_invoice.amount_paid == Decimal('2000.00')

    def test_put_replaces_invoice(self, authenticated_client, partial_invoice):
        response = authenticated_client.put(
            reverse('invoices:invoice-detail', args=[partial_invoice.id]),
            {
                'amount_due': '4250.00',
                'amount_paid': '0.00',
                'date_issued': '2024-07-02',
                'due_date': '2024-09-01',
            },
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'unpaid'
        assert response.data['due_date'] == '2024-09-01'

    def test_update_rejects_overdue_status(self, authenticated_client, partial_invoice):
        response = authenticated_client.patch(
            reverse('invoices:invoice-detail', args=[partial_invoice.id]),
            {'status': 'overdue'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invoices_cannot_be_deleted(self, authenticated_client, partial_invoice):
        response = authenticated_client.delete(
            reverse('invoices:invoice-detail', args=[partial_invoice.id])
        )

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert Invoice.objects.count() == 1

    def test_retrieve_missing(self, authenticated_client):
        response = authenticated_client.get(
            '/api/invoices/00000000-0000-0000-0000-000000000000/'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_retrieve(self, authenticated_client, partial_invoice):
        response = authenticated_client.get(
            reverse('invoices:invoice-detail', args=[partial_invoice.id])
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['customer_name'] == 'Nordic Roasters AB'
        assert response.data['date_issued'] == date(2024, 7, 2).isoformat()
