"""One-click invoice generation from a sales order."""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.invoices.models import Invoice, InvoiceStatus, PaymentMethod
from .invoice_management import lock_sales_order, ensure_order_not_invoiced, save_invoice
from .numbering import next_invoice_number

logger = logging.getLogger(__name__)


@transaction.atomic
def generate_invoice_for_order(*, order_id: UUID, today: Optional[date] = None) -> Invoice:
    """
    Issue an unpaid invoice for the full order total.

    The invoice is due the configured number of days after the order date
    and defaults to wire transfer. Creating the invoice row is what links
    it to the order, so there is no separate write to keep in sync.

    Args:
        order_id: Sales order to invoice
        today: Issue date (defaults to today)

    Returns:
        Created Invoice instance

    Raises:
        SalesOrderNotFoundError: If order doesn't exist
        InvoiceAlreadyExistsError: If the order already has an invoice;
            nothing is written
        RecordStoreError: If the database write fails
    """
    today = today or timezone.localdate()
    order = lock_sales_order(order_id)
    ensure_order_not_invoiced(order)

    invoice = Invoice(
        order=order,
        customer_id=order.customer_id,
        invoice_number=next_invoice_number(year=today.year),
        date_issued=today,
        due_date=order.order_date + timedelta(days=settings.INVOICE_PAYMENT_TERMS_DAYS),
        amount_due=order.total_amount,
        amount_paid=Decimal('0.00'),
        payment_method=PaymentMethod.WIRE_TRANSFER,
        status=InvoiceStatus.UNPAID,
    )
    save_invoice(invoice)

    logger.info(
        "Generated invoice %s for order %s (%s due %s)",
        invoice.invoice_number, order.id, invoice.amount_due, invoice.due_date,
    )
    return invoice
