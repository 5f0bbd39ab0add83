"""Domain exceptions for crm app."""
from rest_framework.exceptions import APIException


class CrmServiceError(Exception):
    """Base exception for all crm service errors."""
    pass


class CustomerNotFoundError(CrmServiceError):
    """Customer does not exist."""
    pass


class InvalidCustomerDataError(CrmServiceError):
    """Required customer field missing or invalid."""
    pass


class InvalidInteractionError(CrmServiceError):
    """Interaction type or date is invalid."""
    pass


class CustomerHasOrdersError(CrmServiceError):
    """Customer is still referenced by sales orders and cannot be deleted."""
    pass


class RecordStoreError(APIException):
    """The database rejected or failed a write."""
    status_code = 503
    default_detail = 'Customer records are temporarily unavailable. Please retry.'
    default_code = 'record_store_error'
