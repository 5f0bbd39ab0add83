"""Invoice service - manual invoices, edits and listing."""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction, DatabaseError
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.invoices.models import Invoice, InvoiceStatus, PaymentMethod
from apps.invoices.status import derive_payment_status, sync_date_paid
from apps.sales.models import SalesOrder
from .exceptions import (
    InvoiceNotFoundError,
    SalesOrderNotFoundError,
    InvoiceAlreadyExistsError,
    InvalidInvoiceDataError,
    RecordStoreError,
)
from .numbering import next_invoice_number

logger = logging.getLogger(__name__)

# Distinguishes "leave unchanged" from an explicit None for nullable fields
UNSET = object()

PERSISTED_STATUSES = (InvoiceStatus.UNPAID, InvoiceStatus.PARTIAL, InvoiceStatus.PAID)


def _validate_amount(name: str, value) -> None:
    if value is not None and value < 0:
        raise InvalidInvoiceDataError(f"{name} cannot be negative")


def _validate_payment_method(payment_method) -> None:
    if payment_method and payment_method not in PaymentMethod.values:
        raise InvalidInvoiceDataError(f"Unknown payment method: {payment_method}")


def save_invoice(invoice: Invoice) -> None:
    try:
        invoice.save()
    except DatabaseError:
        logger.exception("Failed to save invoice %s", invoice.invoice_number)
        raise RecordStoreError()


def lock_sales_order(order_id: UUID) -> SalesOrder:
    try:
        return SalesOrder.objects.select_for_update().get(id=order_id)
    except SalesOrder.DoesNotExist:
        raise SalesOrderNotFoundError("Sales order not found")


def ensure_order_not_invoiced(order: SalesOrder) -> None:
    if Invoice.objects.filter(order=order).exists():
        logger.warning("Invoice already exists for sales order %s", order.id)
        raise InvoiceAlreadyExistsError("Invoice already exists for this order.")


@transaction.atomic
def create_invoice(
    *,
    order_id: UUID,
    amount_due: Optional[Decimal] = None,
    amount_paid: Decimal = Decimal('0.00'),
    date_issued: Optional[date] = None,
    due_date: Optional[date] = None,
    payment_method: str = '',
    date_paid: Optional[date] = None,
    today: Optional[date] = None,
) -> Invoice:
    """
    Create an invoice by hand for a sales order.

    The customer comes from the order and the status is derived from the
    amounts. A fully paid invoice gets today's date as date_paid unless one
    was given. The number is allocated in the current year even when
    date_issued is backdated.

    Args:
        order_id: Sales order being invoiced
        amount_due: Defaults to the order total
        amount_paid: Amount received so far
        date_issued: Defaults to today
        due_date: Defaults to order date plus the payment terms
        payment_method: PaymentMethod value or blank
        date_paid: When payment completed
        today: Reference date (defaults to today)

    Returns:
        Created Invoice instance

    Raises:
        SalesOrderNotFoundError: If order doesn't exist
        InvoiceAlreadyExistsError: If the order already has an invoice
        InvalidInvoiceDataError: If amounts or payment method are invalid
        RecordStoreError: If the database write fails
    """
    today = today or timezone.localdate()
    order = lock_sales_order(order_id)
    ensure_order_not_invoiced(order)

    if amount_due is None:
        amount_due = order.total_amount
    _validate_amount("Amount due", amount_due)
    _validate_amount("Amount paid", amount_paid)
    _validate_payment_method(payment_method)

    date_issued = date_issued or today
    if due_date is None:
        due_date = order.order_date + timedelta(days=settings.INVOICE_PAYMENT_TERMS_DAYS)

    status = derive_payment_status(amount_due, amount_paid)

    invoice = Invoice(
        order=order,
        customer_id=order.customer_id,
        invoice_number=next_invoice_number(year=today.year),
        date_issued=date_issued,
        due_date=due_date,
        amount_due=amount_due,
        amount_paid=amount_paid,
        payment_method=payment_method or '',
        status=status,
        date_paid=sync_date_paid(None, status, date_paid, today),
    )
    save_invoice(invoice)

    logger.info("Created invoice %s for order %s", invoice.invoice_number, order.id)
    return invoice


def get_invoice_by_id(*, invoice_id: UUID) -> Invoice:
    """
    Retrieve an invoice.

    Raises:
        InvoiceNotFoundError: If invoice doesn't exist
    """
    try:
        return Invoice.objects.select_related('customer', 'order').get(id=invoice_id)
    except Invoice.DoesNotExist:
        raise InvoiceNotFoundError("Invoice not found")


@transaction.atomic
def update_invoice(
    *,
    invoice_id: UUID,
    amount_due: Optional[Decimal] = None,
    amount_paid: Optional[Decimal] = None,
    status: Optional[str] = None,
    date_issued: Optional[date] = None,
    due_date: Optional[date] = None,
    payment_method: Optional[str] = None,
    date_paid=UNSET,
    today: Optional[date] = None,
) -> Invoice:
    """
    Update an invoice.

    Changing either amount re-derives the status and keeps date_paid in
    step with it; the derived status then wins over any status passed in.
    Without an amount change, ``status`` is applied as a manual override
    and date_paid is left alone. Overdue is never stored.

    Raises:
        InvoiceNotFoundError: If invoice doesn't exist
        InvalidInvoiceDataError: If a value is invalid
        RecordStoreError: If the database write fails
    """
    today = today or timezone.localdate()

    try:
        invoice = Invoice.objects.select_for_update().get(id=invoice_id)
    except Invoice.DoesNotExist:
        raise InvoiceNotFoundError("Invoice not found")

    _validate_amount("Amount due", amount_due)
    _validate_amount("Amount paid", amount_paid)
    _validate_payment_method(payment_method)
    if status is not None and status not in PERSISTED_STATUSES:
        raise InvalidInvoiceDataError(
            f"Status must be one of: {', '.join(PERSISTED_STATUSES)}"
        )

    if date_issued is not None:
        invoice.date_issued = date_issued
    if due_date is not None:
        invoice.due_date = due_date
    if payment_method is not None:
        invoice.payment_method = payment_method
    if date_paid is not UNSET:
        invoice.date_paid = date_paid

    amounts_changed = (
        (amount_due is not None and amount_due != invoice.amount_due)
        or (amount_paid is not None and amount_paid != invoice.amount_paid)
    )

    if amounts_changed:
        previous_status = invoice.status
        if amount_due is not None:
            invoice.amount_due = amount_due
        if amount_paid is not None:
            invoice.amount_paid = amount_paid
        invoice.status = derive_payment_status(invoice.amount_due, invoice.amount_paid)
        invoice.date_paid = sync_date_paid(
            previous_status, invoice.status, invoice.date_paid, today
        )
    elif status is not None:
        invoice.status = status

    save_invoice(invoice)
    return invoice


def get_invoices(
    *,
    status: Optional[str] = None,
    customer_id: Optional[UUID] = None,
    today: Optional[date] = None,
) -> QuerySet[Invoice]:
    """
    List invoices in insertion order.

    ``status`` filters on the effective status: 'overdue' matches open
    invoices past due, while 'unpaid' and 'partial' exclude those.
    """
    today = today or timezone.localdate()
    queryset = Invoice.objects.select_related('customer', 'order')

    if status == InvoiceStatus.OVERDUE:
        queryset = queryset.filter(
            status__in=[InvoiceStatus.UNPAID, InvoiceStatus.PARTIAL],
            due_date__lt=today,
        )
    elif status in (InvoiceStatus.UNPAID, InvoiceStatus.PARTIAL):
        queryset = queryset.filter(Q(status=status) & Q(due_date__gte=today))
    elif status:
        queryset = queryset.filter(status=status)

    if customer_id:
        queryset = queryset.filter(customer_id=customer_id)

    return queryset.order_by('created_at')
