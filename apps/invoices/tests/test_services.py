"""
Service layer unit tests for invoices app.

Tests cover:
- Manual creation with derived status and date_paid
- Amount edits vs manual status overrides
- One-click generation and duplicate protection
- Invoice numbering
- Effective status filtering
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4
from unittest.mock import patch
from django.db import DatabaseError

from apps.invoices.models import Invoice, InvoiceSequence, InvoiceStatus, PaymentMethod
from apps.invoices.services import (
    create_invoice,
    get_invoice_by_id,
    update_invoice,
    generate_invoice_for_order,
    get_invoices,
    next_invoice_number,
)
from apps.invoices.services.exceptions import (
    InvoiceNotFoundError,
    SalesOrderNotFoundError,
    InvoiceAlreadyExistsError,
    InvalidInvoiceDataError,
    RecordStoreError,
)


@pytest.mark.django_db
class TestCreateInvoice:
    """Tests for create_invoice()."""

    def test_partial_payment_derives_partial(self, order):
        invoice = create_invoice(
            order_id=order.id,
            amount_paid=Decimal('2000'),
            today=date(2024, 7, 2),
        )

        assert invoice.amount_due == Decimal('4250.00')
        assert invoice.status == InvoiceStatus.PARTIAL
        assert invoice.date_paid is None
        assert invoice.customer_id == order.customer_id
        assert invoice.due_date == date(2024, 7, 31)
        assert invoice.date_issued == date(2024, 7, 2)

    def test_full_payment_stamps_date_paid(self, order):
        invoice = create_invoice(
            order_id=order.id,
            amount_paid=Decimal('4250'),
            today=date(2024, 7, 20),
        )

        assert invoice.status == InvoiceStatus.PAID
        assert invoice.date_paid == date(2024, 7, 20)

    def test_backdated_invoice_numbered_in_issuing_year(self, order):
        invoice = create_invoice(
            order_id=order.id,
            date_issued=date(2023, 5, 1),
            today=date(2024, 7, 2),
        )

        assert invoice.date_issued == date(2023, 5, 1)
        assert invoice.invoice_number == 'INV-2024-001'

    def test_rejects_order_with_invoice(self, order, partial_invoice):
        with pytest.raises(InvoiceAlreadyExistsError):
            create_invoice(order_id=order.id)

    def test_unknown_order(self):
        with pytest.raises(SalesOrderNotFoundError):
            create_invoice(order_id=uuid4())

    def test_rejects_negative_amount(self, order):
        with pytest.raises(InvalidInvoiceDataError):
            create_invoice(order_id=order.id, amount_paid=Decimal('-1'))


@pytest.mark.django_db
class TestUpdateInvoice:
    """Tests for update_invoice()."""

    def test_paying_in_full_sets_paid_and_keeps_date(self, partial_invoice):
        invoice = update_invoice(
            invoice_id=partial_invoice.id,
            amount_paid=Decimal('4250'),
            today=date(2024, 7, 30),
        )

        assert invoice.status == InvoiceStatus.PAID
        assert invoice.date_paid == date(2024, 7, 15)

    def test_paying_in_full_without_date_stamps_today(self, partial_invoice):
        invoice = update_invoice(
            invoice_id=partial_invoice.id,
            amount_paid=Decimal('4250'),
            date_paid=None,
            today=date(2024, 7, 30),
        )

        assert invoice.date_paid == date(2024, 7, 30)

    def test_reducing_payment_clears_date_paid(self, partial_invoice):
        paid = update_invoice(
            invoice_id=partial_invoice.id,
            amount_paid=Decimal('4250'),
            today=date(2024, 7, 30),
        )
        assert paid.status == InvoiceStatus.PAID

        invoice = update_invoice(
            invoice_id=partial_invoice.id,
            amount_paid=Decimal('1000'),
            today=date(2024, 8, 2),
        )

        assert invoice.status == InvoiceStatus.PARTIAL
        assert invoice.date_paid is None

    def test_manual_status_override_leaves_date_paid(self, partial_invoice):
        invoice = update_invoice(
            invoice_id=partial_invoice.id,
            status=InvoiceStatus.PAID,
            today=date(2024, 7, 30),
        )

        assert invoice.status == InvoiceStatus.PAID
        assert invoice.date_paid == date(2024, 7, 15)
        assert invoice.amount_paid == Decimal('2000.00')

    def test_amount_change_wins_over_manual_status(self, partial_invoice):
        invoice = update_invoice(
            invoice_id=partial_invoice.id,
            amount_paid=Decimal('0'),
            status=InvoiceStatus.PAID,
            today=date(2024, 7, 30),
        )

        assert invoice.status == InvoiceStatus.UNPAID

    def test_overdue_cannot_be_stored(self, partial_invoice):
        with pytest.raises(InvalidInvoiceDataError):
            update_invoice(invoice_id=partial_invoice.id, status=InvoiceStatus.OVERDUE)

    def test_rejects_unknown_payment_method(self, partial_invoice):
        with pytest.raises(InvalidInvoiceDataError):
            update_invoice(invoice_id=partial_invoice.id, payment_method='cheque')

    def test_not_found(self):
        with pytest.raises(InvoiceNotFoundError):
            update_invoice(invoice_id=uuid4(), amount_paid=Decimal('1'))

    def test_get_not_found(self):
        with pytest.raises(InvoiceNotFoundError):
            get_invoice_by_id(invoice_id=uuid4())


@pytest.mark.django_db
class TestGenerateInvoice:
    """Tests for generate_invoice_for_order()."""

    def test_generates_unpaid_wire_invoice(self, order):
        invoice = generate_invoice_for_order(order_id=order.id, today=date(2024, 7, 2))

        assert invoice.amount_due == Decimal('4250.00')
        assert invoice.amount_paid == Decimal('0.00')
        assert invoice.status == InvoiceStatus.UNPAID
        assert invoice.payment_method == PaymentMethod.WIRE_TRANSFER
        assert invoice.due_date == date(2024, 7, 31)
        assert invoice.date_issued == date(2024, 7, 2)
        assert invoice.invoice_number == 'INV-2024-001'
        order.refresh_from_db()
        assert order.linked_invoice_id == invoice.id

    def test_existing_invoice_aborts_without_writing(self, order, partial_invoice, caplog):
        with pytest.raises(InvoiceAlreadyExistsError):
            generate_invoice_for_order(order_id=order.id, today=date(2024, 7, 3))

        assert Invoice.objects.count() == 1
        assert not InvoiceSequence.objects.exists()
        assert 'Invoice already exists' in caplog.text

    def test_unknown_order(self):
        with pytest.raises(SalesOrderNotFoundError):
            generate_invoice_for_order(order_id=uuid4())

    def test_failed_insert_rolls_back_numbering(self, order):
        with patch.object(Invoice, 'save', side_effect=DatabaseError('connection lost')):
            with pytest.raises(RecordStoreError):
                generate_invoice_for_order(order_id=order.id, today=date(2024, 7, 2))

        assert not Invoice.objects.exists()
        assert not InvoiceSequence.objects.exists()


@pytest.mark.django_db
class TestInvoiceNumbering:
    """Tests for next_invoice_number()."""

    def test_numbers_increase(self, order, second_order):
        first = generate_invoice_for_order(order_id=order.id, today=date(2024, 7, 2))
        second = generate_invoice_for_order(order_id=second_order.id, today=date(2024, 8, 2))

        assert first.invoice_number == 'INV-2024-001'
        assert second.invoice_number == 'INV-2024-002'

    def test_counter_seeded_from_existing_invoices(self, partial_invoice):
        assert next_invoice_number(year=2024) == 'INV-2024-002'

    def test_sequence_continues_into_new_year(self, order, second_order):
        december = generate_invoice_for_order(order_id=order.id, today=date(2024, 12, 30))
        january = generate_invoice_for_order(order_id=second_order.id, today=date(2025, 1, 2))

        assert december.invoice_number == 'INV-2024-001'
        assert january.invoice_number == 'INV-2025-002'
        assert next_invoice_number(year=2024) == 'INV-2024-002'


@pytest.mark.django_db
class TestGetInvoices:
    """Tests for get_invoices() effective status filtering."""

    def test_overdue_filter(self, partial_invoice):
        assert list(get_invoices(status='overdue', today=date(2024, 8, 2))) == [partial_invoice]
        assert list(get_invoices(status='overdue', today=date(2024, 8, 1))) == []

    def test_partial_filter_excludes_overdue(self, partial_invoice):
        assert list(get_invoices(status='partial', today=date(2024, 8, 2))) == []
        assert list(get_invoices(status='partial', today=date(2024, 7, 20))) == [partial_invoice]

    def test_customer_filter(self, partial_invoice, customer):
        assert list(get_invoices(customer_id=customer.id)) == [partial_invoice]
        assert list(get_invoices(customer_id=uuid4())) == []
