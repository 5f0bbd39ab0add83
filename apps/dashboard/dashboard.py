"""
Dashboard Module
================

This module computes the business metrics shown on the dashboard from
customers, sales orders, invoices and expenses.

Classes:
    DashboardMetrics: Static methods for each dashboard metric.

Key Features:
    - Revenue collected and payments still outstanding
    - Approved spending for the current month
    - Top customers by collected revenue
    - Alerts for long-overdue invoices and unapproved high-value expenses
    - The latest approved high-value expenses
    - Profit per shipment (collected revenue minus approved order expenses)

Example:
    Building the full dashboard::

        from apps.dashboard.dashboard import DashboardMetrics

        data = DashboardMetrics.build_dashboard(
            customers=list(Customer.objects.all()),
            sales_orders=list(SalesOrder.objects.all()),
            invoices=list(Invoice.objects.all()),
            expenses=list(Expense.objects.all()),
            today=date.today(),
        )
        outstanding = data["outstanding_payments"]

Note:
    Every method is pure and read-only. Records are plain sequences of any
    objects exposing the model attribute names (``order_id``,
    ``customer_id``, ``related_order_id``, ...), so the metrics can be
    computed without a database. Results are recomputed on every call.
"""

from datetime import timedelta
from decimal import Decimal

from apps.crm.models import CustomerStatus
from apps.invoices.models import InvoiceStatus

COLLECTED_STATUSES = (InvoiceStatus.PAID, InvoiceStatus.PARTIAL)
OUTSTANDING_STATUSES = (InvoiceStatus.UNPAID, InvoiceStatus.PARTIAL, InvoiceStatus.OVERDUE)
ACTIVE_CUSTOMER_STATUSES = (CustomerStatus.ACTIVE, CustomerStatus.REPEAT)


class DashboardMetrics:
    """
    Pure aggregation over in-memory record collections.

    Methods:
        monthly_revenue: Amount collected on invoiced orders.
        outstanding_payments: Balance still owed on open invoices.
        approved_expenses_this_month: Approved spending in today's month.
        top_performing_customers: Customers ranked by collected revenue.
        overdue_alerts: Open invoices more than N days past due.
        high_value_expenses_awaiting_approval: Large unapproved expenses.
        recently_approved_high_value_expenses: Latest large approved expenses.
        profit_per_shipment: Collected revenue minus approved order costs.
        active_customers_count: Customers with Active or Repeat status.
        build_dashboard: All of the above in one dict.

    Note:
        All methods return plain numbers, dicts or lists of the input
        records, making them suitable for serializers.
    """

    @staticmethod
    def _first_invoice_for_order(order_id, invoices):
        for invoice in invoices:
            if invoice.order_id == order_id:
                return invoice
        return None

    @staticmethod
    def _collected_invoice_for_order(order_id, invoices):
        for invoice in invoices:
            if invoice.order_id == order_id and invoice.status in COLLECTED_STATUSES:
                return invoice
        return None

    @staticmethod
    def monthly_revenue(sales_orders, invoices):
        """
        Calculate revenue collected on sales orders.

        For each order, the first invoice referencing it counts when its
        status is Paid or Partial; its amount_paid is added. Invoices
        whose order was deleted are not counted.

        Args:
            sales_orders: Sequence of SalesOrder-like records.
            invoices: Sequence of Invoice-like records.

        Returns:
            Decimal: Total amount paid. Decimal('0') when nothing matches.

        Example:
            >>> DashboardMetrics.monthly_revenue([order], [partial_invoice])
            Decimal('2000.00')
        """
        total = Decimal('0')
        for order in sales_orders:
            invoice = DashboardMetrics._first_invoice_for_order(order.id, invoices)
            if invoice is not None and invoice.status in COLLECTED_STATUSES:
                total += invoice.amount_paid
        return total

    @staticmethod
    def outstanding_payments(invoices):
        """
        Sum the open balance (amount_due - amount_paid) of every unpaid,
        partially paid or overdue invoice.
        """
        return sum(
            (inv.amount_due - inv.amount_paid
             for inv in invoices if inv.status in OUTSTANDING_STATUSES),
            Decimal('0'),
        )

    @staticmethod
    def approved_expenses_this_month(expenses, today):
        """Sum approved expenses dated in the same month and year as ``today``."""
        return sum(
            (exp.amount for exp in expenses
             if exp.is_approved
             and exp.date.year == today.year
             and exp.date.month == today.month),
            Decimal('0'),
        )

    @staticmethod
    def top_performing_customers(customers, sales_orders, invoices, limit=5):
        """
        Rank customers by revenue collected on their orders.

        A customer's total is the amount_paid of the Paid or Partial
        invoice of each of their orders. Customers with nothing collected
        are dropped. The sort is stable, so equal totals keep the order in
        which customers were given.

        Args:
            customers: Sequence of Customer-like records.
            sales_orders: Sequence of SalesOrder-like records.
            invoices: Sequence of Invoice-like records.
            limit: Maximum number of customers returned.

        Returns:
            list: Up to ``limit`` dicts, highest total first::

                [
                    {
                        'customer_id': UUID('...'),
                        'name': 'Nordic Roasters AB',
                        'total_sales': Decimal('4250.00'),
                    },
                    ...
                ]
        """
        ranking = []
        for customer in customers:
            total_sales = Decimal('0')
            for order in sales_orders:
                if order.customer_id != customer.id:
                    continue
                invoice = DashboardMetrics._collected_invoice_for_order(order.id, invoices)
                if invoice is not None:
                    total_sales += invoice.amount_paid
            if total_sales > 0:
                ranking.append({
                    'customer_id': customer.id,
                    'name': customer.company_name,
                    'total_sales': total_sales,
                })

        ranking.sort(key=lambda item: item['total_sales'], reverse=True)
        return ranking[:limit]

    @staticmethod
    def overdue_alerts(invoices, today, alert_days=30):
        """
        Open invoices whose due date is more than ``alert_days`` days ago.

        Args:
            invoices: Sequence of Invoice-like records.
            today: Reference date.
            alert_days: How far past due an invoice must be.

        Returns:
            list: Matching invoices in input order.
        """
        cutoff = today - timedelta(days=alert_days)
        return [
            inv for inv in invoices
            if inv.status in OUTSTANDING_STATUSES
            and inv.due_date < cutoff
            and inv.due_date < today
        ]

    @staticmethod
    def high_value_expenses_awaiting_approval(expenses, threshold=Decimal('500')):
        """Unapproved expenses with an amount strictly above ``threshold``."""
        return [exp for exp in expenses if not exp.is_approved and exp.amount > threshold]

    @staticmethod
    def recently_approved_high_value_expenses(expenses, threshold=Decimal('500'), limit=5):
        """
        The last ``limit`` approved expenses above ``threshold``, newest first.

        ``expenses`` must be in insertion order; "newest" means most
        recently recorded, not latest expense date.
        """
        approved = [exp for exp in expenses if exp.is_approved and exp.amount > threshold]
        return list(reversed(approved[-limit:])) if limit > 0 else []

    @staticmethod
    def profit_per_shipment(sales_orders, invoices, expenses):
        """
        Calculate profit for each sales order.

        Revenue is the amount_paid of the order's Paid or Partial invoice
        (zero when there is none). Costs are the approved expenses tied to
        the order. Orders with neither revenue nor costs are left out.

        Args:
            sales_orders: Sequence of SalesOrder-like records.
            invoices: Sequence of Invoice-like records.
            expenses: Sequence of Expense-like records.

        Returns:
            list: One dict per order, in order sequence::

                [
                    {
                        'order_id': UUID('...'),
                        'product': 'Yirgacheffe G1 Washed',
                        'total_revenue': Decimal('2000.00'),
                        'total_expenses': Decimal('750.00'),
                        'profit': Decimal('1250.00'),
                    },
                    ...
                ]
        """
        results = []
        for order in sales_orders:
            total_expenses = sum(
                (exp.amount for exp in expenses
                 if exp.related_order_id == order.id and exp.is_approved),
                Decimal('0'),
            )
            invoice = DashboardMetrics._collected_invoice_for_order(order.id, invoices)
            total_revenue = invoice.amount_paid if invoice is not None else Decimal('0')

            if total_revenue > 0 or total_expenses > 0:
                results.append({
                    'order_id': order.id,
                    'product': order.product,
                    'total_revenue': total_revenue,
                    'total_expenses': total_expenses,
                    'profit': total_revenue - total_expenses,
                })
        return results

    @staticmethod
    def active_customers_count(customers):
        """Number of customers in Active or Repeat status."""
        return sum(1 for c in customers if c.status in ACTIVE_CUSTOMER_STATUSES)

    @staticmethod
    def build_dashboard(
        *,
        customers,
        sales_orders,
        invoices,
        expenses,
        today,
        top_customers_limit=5,
        overdue_alert_days=30,
        high_value_threshold=Decimal('500'),
    ):
        """
        Compute every dashboard metric in one pass over the collections.

        Returns:
            dict: Dashboard data::

                {
                    'as_of': date(2024, 8, 1),
                    'monthly_revenue': Decimal,
                    'outstanding_payments': Decimal,
                    'approved_expenses_this_month': Decimal,
                    'active_customers': int,
                    'top_customers': [...],
                    'overdue_alerts': [Invoice, ...],
                    'high_value_expenses': [Expense, ...],
                    'recent_high_value_approvals': [Expense, ...],
                    'profit_per_shipment': [...],
                }
        """
        return {
            'as_of': today,
            'monthly_revenue': DashboardMetrics.monthly_revenue(sales_orders, invoices),
            'outstanding_payments': DashboardMetrics.outstanding_payments(invoices),
            'approved_expenses_this_month': DashboardMetrics.approved_expenses_this_month(
                expenses, today
            ),
            'active_customers': DashboardMetrics.active_customers_count(customers),
            'top_customers': DashboardMetrics.top_performing_customers(
                customers, sales_orders, invoices, limit=top_customers_limit
            ),
            'overdue_alerts': DashboardMetrics.overdue_alerts(
                invoices, today, alert_days=overdue_alert_days
            ),
            'high_value_expenses': DashboardMetrics.high_value_expenses_awaiting_approval(
                expenses, threshold=high_value_threshold
            ),
            'recent_high_value_approvals': DashboardMetrics.recently_approved_high_value_expenses(
                expenses, threshold=high_value_threshold
            ),
            'profit_per_shipment': DashboardMetrics.profit_per_shipment(
                sales_orders, invoices, expenses
            ),
        }
