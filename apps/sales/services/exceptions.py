"""Domain exceptions for sales app."""
from rest_framework.exceptions import APIException


class SalesServiceError(Exception):
    """Base exception for all sales service errors."""
    pass


class SalesOrderNotFoundError(SalesServiceError):
    """Sales order does not exist."""
    pass


class CustomerNotFoundError(SalesServiceError):
    """Customer referenced by the order does not exist."""
    pass


class InvalidSalesOrderDataError(SalesServiceError):
    """Quantity, price, or document metadata is invalid."""
    pass


class RecordStoreError(APIException):
    """The database rejected or failed a write."""
    status_code = 503
    default_detail = 'Sales records are temporarily unavailable. Please retry.'
    default_code = 'record_store_error'
