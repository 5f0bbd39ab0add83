"""
Expenses app services layer.

Recording, approving and summarizing business expenses.
"""

from .exceptions import (
    ExpensesServiceError,
    ExpenseNotFoundError,
    SalesOrderNotFoundError,
    InvalidExpenseDataError,
    RecordStoreError,
)

from .expense_management import (
    UNSET,
    create_expense,
    get_expense_by_id,
    update_expense,
    delete_expense,
    get_expenses,
)

from .approval import (
    is_high_value,
    set_expense_approval,
    toggle_expense_approval,
)

from .summaries import (
    summarize_expenses_by_month,
    summarize_expenses_by_year,
)


__all__ = [
    # Exceptions
    'ExpensesServiceError',
    'ExpenseNotFoundError',
    'SalesOrderNotFoundError',
    'InvalidExpenseDataError',
    'RecordStoreError',
    # Expense management
    'UNSET',
    'create_expense',
    'get_expense_by_id',
    'update_expense',
    'delete_expense',
    'get_expenses',
    # Approval
    'is_high_value',
    'set_expense_approval',
    'toggle_expense_approval',
    # Summaries
    'summarize_expenses_by_month',
    'summarize_expenses_by_year',
]
