"""
Invoices app services layer.

Invoice numbering and generation run inside a single transaction with the
sales order and the numbering counter locked.
"""

from .exceptions import (
    InvoicesServiceError,
    InvoiceNotFoundError,
    SalesOrderNotFoundError,
    InvoiceAlreadyExistsError,
    InvalidInvoiceDataError,
    RecordStoreError,
)

from .invoice_management import (
    UNSET,
    create_invoice,
    get_invoice_by_id,
    update_invoice,
    get_invoices,
)

from .invoice_generation import (
    generate_invoice_for_order,
)

from .numbering import (
    next_invoice_number,
)


__all__ = [
    # Exceptions
    'InvoicesServiceError',
    'InvoiceNotFoundError',
    'SalesOrderNotFoundError',
    'InvoiceAlreadyExistsError',
    'InvalidInvoiceDataError',
    'RecordStoreError',
    # Invoice management
    'UNSET',
    'create_invoice',
    'get_invoice_by_id',
    'update_invoice',
    'get_invoices',
    # Generation
    'generate_invoice_for_order',
    'next_invoice_number',
]
