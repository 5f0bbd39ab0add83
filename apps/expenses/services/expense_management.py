"""Expense service - CRUD operations and filtered listing."""

import logging
import re
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction, DatabaseError
from django.db.models import QuerySet

from apps.expenses.models import Expense, ExpenseType
from apps.sales.models import SalesOrder
from .exceptions import (
    ExpenseNotFoundError,
    SalesOrderNotFoundError,
    InvalidExpenseDataError,
    RecordStoreError,
)

logger = logging.getLogger(__name__)

# Distinguishes "leave unchanged" from an explicit None for nullable fields
UNSET = object()

DATE_PREFIX_RE = re.compile(r'^(?P<year>\d{4})(?:-(?P<month>\d{2}))?$')


def _validate(*, expense_type=None, amount=None) -> None:
    if expense_type is not None and expense_type not in ExpenseType.values:
        raise InvalidExpenseDataError(f"Unknown expense type: {expense_type}")
    if amount is not None and amount <= 0:
        raise InvalidExpenseDataError("Amount must be greater than zero")


def _get_order(order_id: Optional[UUID]) -> Optional[SalesOrder]:
    if order_id is None:
        return None
    try:
        return SalesOrder.objects.get(id=order_id)
    except SalesOrder.DoesNotExist:
        raise SalesOrderNotFoundError("Related sales order not found")


def save_expense(expense: Expense) -> None:
    try:
        expense.save()
    except DatabaseError:
        logger.exception("Failed to save expense %s", expense.id)
        raise RecordStoreError()


@transaction.atomic
def create_expense(
    *,
    expense_type: str,
    expense_date: date,
    amount: Decimal,
    paid_to: str,
    description: str = '',
    related_order_id: Optional[UUID] = None,
    receipt_url: str = '',
    is_approved: bool = False,
) -> Expense:
    """
    Record a new expense.

    Expenses start unapproved unless stated otherwise.

    Raises:
        InvalidExpenseDataError: If type is unknown or amount not positive
        SalesOrderNotFoundError: If the related order doesn't exist
        RecordStoreError: If the database write fails
    """
    _validate(expense_type=expense_type, amount=amount)

    expense = Expense(
        expense_type=expense_type,
        date=expense_date,
        amount=amount,
        paid_to=paid_to,
        description=description,
        related_order=_get_order(related_order_id),
        receipt_url=receipt_url or '',
        is_approved=is_approved,
    )
    save_expense(expense)

    logger.info("Recorded %s expense %s of %s", expense_type, expense.id, amount)
    return expense


def get_expense_by_id(*, expense_id: UUID) -> Expense:
    """
    Retrieve an expense.

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
    """
    try:
        return Expense.objects.select_related('related_order').get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError("Expense not found")


@transaction.atomic
def update_expense(
    *,
    expense_id: UUID,
    expense_type: Optional[str] = None,
    expense_date: Optional[date] = None,
    amount: Optional[Decimal] = None,
    paid_to: Optional[str] = None,
    description: Optional[str] = None,
    related_order_id=UNSET,
    receipt_url: Optional[str] = None,
    is_approved: Optional[bool] = None,
) -> Expense:
    """
    Update an expense. Fields left as None are not changed.

    ``related_order_id`` may be passed as None to detach the order.

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
        InvalidExpenseDataError: If a value is invalid
        SalesOrderNotFoundError: If the related order doesn't exist
        RecordStoreError: If the database write fails
    """
    try:
        expense = Expense.objects.select_for_update().get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError("Expense not found")

    _validate(expense_type=expense_type, amount=amount)

    if expense_type is not None:
        expense.expense_type = expense_type
    if expense_date is not None:
        expense.date = expense_date
    if amount is not None:
        expense.amount = amount
    if paid_to is not None:
        expense.paid_to = paid_to
    if description is not None:
        expense.description = description
    if related_order_id is not UNSET:
        expense.related_order = _get_order(related_order_id)
    if receipt_url is not None:
        expense.receipt_url = receipt_url
    if is_approved is not None:
        expense.is_approved = is_approved

    save_expense(expense)
    return expense


@transaction.atomic
def delete_expense(*, expense_id: UUID) -> None:
    """
    Delete an expense.

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
        RecordStoreError: If the database write fails
    """
    try:
        expense = Expense.objects.get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError("Expense not found")

    try:
        expense.delete()
    except DatabaseError:
        logger.exception("Failed to delete expense %s", expense_id)
        raise RecordStoreError()

    logger.info("Deleted expense %s", expense_id)


def get_expenses(
    *,
    expense_type: Optional[str] = None,
    date_prefix: Optional[str] = None,
    related_order_id: Optional[UUID] = None,
) -> QuerySet[Expense]:
    """
    List expenses newest first, optionally filtered.

    Args:
        expense_type: ExpenseType value
        date_prefix: 'YYYY' for a year or 'YYYY-MM' for a month
        related_order_id: Only expenses tied to this order

    Raises:
        InvalidExpenseDataError: If date_prefix is malformed
    """
    queryset = Expense.objects.select_related('related_order')

    if expense_type:
        queryset = queryset.filter(expense_type=expense_type)

    if date_prefix:
        match = DATE_PREFIX_RE.match(date_prefix)
        if not match:
            raise InvalidExpenseDataError("Date filter must be YYYY or YYYY-MM")
        queryset = queryset.filter(date__year=int(match.group('year')))
        if match.group('month'):
            queryset = queryset.filter(date__month=int(match.group('month')))

    if related_order_id:
        queryset = queryset.filter(related_order_id=related_order_id)

    # Same-day expenses keep the order they were recorded in
    return queryset.order_by('-date', 'created_at')
