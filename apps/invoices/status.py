"""
Payment status rules for invoices.

The stored status only ever reflects amounts (unpaid, partial, paid).
Overdue is layered on at read time from the due date, so a stored status
never goes stale as days pass.

All functions are pure and take ``today`` explicitly.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from .models import InvoiceStatus

OPEN_STATUSES = (InvoiceStatus.UNPAID, InvoiceStatus.PARTIAL)


def is_overdue(invoice, today: date) -> bool:
    """True when an unpaid or partially paid invoice is past its due date."""
    return invoice.status in OPEN_STATUSES and invoice.due_date < today


def effective_status(invoice, today: date) -> str:
    """
    Status to display for an invoice.

    Returns 'overdue' for open invoices past their due date, otherwise the
    stored status.
    """
    if is_overdue(invoice, today):
        return InvoiceStatus.OVERDUE
    return invoice.status


def derive_payment_status(amount_due: Decimal, amount_paid: Decimal) -> str:
    """
    Stored payment status implied by the amounts.

    An invoice for nothing counts as paid only once something was paid.
    Overpayment is paid.
    """
    if amount_due <= 0:
        return InvoiceStatus.PAID if amount_paid > 0 else InvoiceStatus.UNPAID
    if amount_paid == 0:
        return InvoiceStatus.UNPAID
    if amount_paid < amount_due:
        return InvoiceStatus.PARTIAL
    return InvoiceStatus.PAID


def sync_date_paid(
    previous_status: Optional[str],
    new_status: str,
    date_paid: Optional[date],
    today: date,
) -> Optional[date]:
    """
    Keep date_paid consistent with a status change driven by amounts.

    Becoming paid stamps today unless a date is already set; leaving paid
    clears the date.
    """
    if new_status == InvoiceStatus.PAID:
        return date_paid or today
    if previous_status == InvoiceStatus.PAID:
        return None
    return date_paid


def format_invoice_number(year: int, sequence: int) -> str:
    """INV-2024-001 style number; sequences past 999 keep all digits."""
    return f"INV-{year}-{sequence:03d}"
