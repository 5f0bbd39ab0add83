"""Expense totals per month and per year."""

from collections import defaultdict
from decimal import Decimal


def summarize_expenses_by_month(expenses) -> dict[str, Decimal]:
    """
    Total amount per 'YYYY-MM', in first-seen order.

    Example:
        {'2024-07': Decimal('1250.00'), '2024-06': Decimal('300.00')}
    """
    totals = defaultdict(Decimal)
    for expense in expenses:
        totals[expense.date.strftime('%Y-%m')] += expense.amount
    return dict(totals)


def summarize_expenses_by_year(expenses) -> dict[str, Decimal]:
    """Total amount per 'YYYY', in first-seen order."""
    totals = defaultdict(Decimal)
    for expense in expenses:
        totals[str(expense.date.year)] += expense.amount
    return dict(totals)
