"""Domain exceptions for expenses app."""
from rest_framework.exceptions import APIException


class ExpensesServiceError(Exception):
    """Base exception for all expenses service errors."""
    pass


class ExpenseNotFoundError(ExpensesServiceError):
    """Expense does not exist."""
    pass


class SalesOrderNotFoundError(ExpensesServiceError):
    """Related sales order does not exist."""
    pass


class InvalidExpenseDataError(ExpensesServiceError):
    """Amount, type or date filter is invalid."""
    pass


class RecordStoreError(APIException):
    """The database rejected or failed a write."""
    status_code = 503
    default_detail = 'Expense records are temporarily unavailable. Please retry.'
    default_code = 'record_store_error'
