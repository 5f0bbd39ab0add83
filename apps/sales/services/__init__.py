"""
Sales app services layer.

Orders are created against existing customers; totals are derived from
quantity and unit price on every save.
"""

from .exceptions import (
    SalesServiceError,
    SalesOrderNotFoundError,
    CustomerNotFoundError,
    InvalidSalesOrderDataError,
    RecordStoreError,
)

from .order_management import (
    create_sales_order,
    get_sales_order_by_id,
    update_sales_order,
    delete_sales_order,
    get_sales_orders,
    add_order_document,
)


__all__ = [
    # Exceptions
    'SalesServiceError',
    'SalesOrderNotFoundError',
    'CustomerNotFoundError',
    'InvalidSalesOrderDataError',
    'RecordStoreError',
    # Order management
    'create_sales_order',
    'get_sales_order_by_id',
    'update_sales_order',
    'delete_sales_order',
    'get_sales_orders',
    'add_order_document',
]
