"""Expense approval."""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction

from apps.expenses.models import Expense
from .exceptions import ExpenseNotFoundError
from .expense_management import save_expense

logger = logging.getLogger(__name__)


def is_high_value(expense, threshold: Optional[Decimal] = None) -> bool:
    """True when the amount is strictly above the approval threshold."""
    if threshold is None:
        threshold = settings.HIGH_VALUE_EXPENSE_THRESHOLD
    return expense.amount > threshold


@transaction.atomic
def set_expense_approval(*, expense_id: UUID, approved: bool) -> Expense:
    """
    Approve or un-approve an expense.

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
    """
    try:
        expense = Expense.objects.select_for_update().get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError("Expense not found")

    expense.is_approved = approved
    save_expense(expense)

    logger.info("Expense %s %s", expense_id, "approved" if approved else "unapproved")
    return expense


@transaction.atomic
def toggle_expense_approval(*, expense_id: UUID) -> Expense:
    """
    Flip the approval flag. Nothing else on the expense changes.

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
    """
    try:
        expense = Expense.objects.select_for_update().get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError("Expense not found")

    expense.is_approved = not expense.is_approved
    save_expense(expense)

    logger.info("Expense %s approval toggled to %s", expense_id, expense.is_approved)
    return expense
