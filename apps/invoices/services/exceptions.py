"""Domain exceptions for invoices app."""
from rest_framework.exceptions import APIException


class InvoicesServiceError(Exception):
    """Base exception for all invoices service errors."""
    pass


class InvoiceNotFoundError(InvoicesServiceError):
    """Invoice does not exist."""
    pass


class SalesOrderNotFoundError(InvoicesServiceError):
    """Sales order to invoice does not exist."""
    pass


class InvoiceAlreadyExistsError(InvoicesServiceError):
    """The sales order already has an invoice."""
    pass


class InvalidInvoiceDataError(InvoicesServiceError):
    """Amounts, dates, status or payment method are invalid."""
    pass


class RecordStoreError(APIException):
    """The database rejected or failed a write."""
    status_code = 503
    default_detail = 'Invoice records are temporarily unavailable. Please retry.'
    default_code = 'record_store_error'
