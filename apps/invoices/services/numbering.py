"""Invoice number allocation."""

from django.db import transaction

from apps.invoices.models import Invoice, InvoiceSequence
from apps.invoices.status import format_invoice_number


@transaction.atomic
def next_invoice_number(*, year: int) -> str:
    """
    Allocate the next invoice number for ``year``.

    The per-year counter row is locked for the rest of the caller's
    transaction, so concurrent allocations are serialized and numbers stay
    unique. A year's counter starts from the total number of invoices
    issued so far, so the sequence carries on across a year change.
    """
    InvoiceSequence.objects.get_or_create(
        year=year, defaults={'last_value': Invoice.objects.count()}
    )

    sequence = InvoiceSequence.objects.select_for_update().get(year=year)
    sequence.last_value += 1
    sequence.save(update_fields=['last_value'])

    return format_invoice_number(year, sequence.last_value)
