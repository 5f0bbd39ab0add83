"""Sales order service - CRUD operations for sales orders."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction, DatabaseError
from django.db.models import QuerySet

from apps.crm.models import Customer
from apps.sales.models import SalesOrder, ShippingStatus
from .exceptions import (
    SalesOrderNotFoundError,
    CustomerNotFoundError,
    InvalidSalesOrderDataError,
    RecordStoreError,
)

logger = logging.getLogger(__name__)


def _validate_amounts(quantity_kg, unit_price):
    if quantity_kg is not None and quantity_kg < 0:
        raise InvalidSalesOrderDataError("Quantity cannot be negative")
    if unit_price is not None and unit_price < 0:
        raise InvalidSalesOrderDataError("Unit price cannot be negative")


def _save(order: SalesOrder) -> None:
    try:
        order.save()
    except DatabaseError:
        logger.exception("Failed to save sales order %s", order.id)
        raise RecordStoreError()


def _get_customer(customer_id: UUID) -> Customer:
    try:
        return Customer.objects.get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError("Customer not found")


@transaction.atomic
def create_sales_order(
    *,
    customer_id: UUID,
    product: str,
    quantity_kg: Decimal,
    unit_price: Decimal,
    order_date: date,
    grade: str = '',
    shipping_status: str = ShippingStatus.PENDING,
) -> SalesOrder:
    """
    Create a sales order for an existing customer.

    The total is always quantity_kg * unit_price rounded to cents and cannot
    be supplied. New orders start without documents or a linked invoice.

    Raises:
        CustomerNotFoundError: If customer doesn't exist
        InvalidSalesOrderDataError: If quantity or price is negative
        RecordStoreError: If the database write fails
    """
    _validate_amounts(quantity_kg, unit_price)
    if shipping_status not in ShippingStatus.values:
        raise InvalidSalesOrderDataError(f"Unknown shipping status: {shipping_status}")

    order = SalesOrder(
        customer=_get_customer(customer_id),
        product=product,
        grade=grade,
        quantity_kg=quantity_kg,
        unit_price=unit_price,
        shipping_status=shipping_status,
        order_date=order_date,
        documents=[],
    )
    _save(order)

    logger.info(
        "Created sales order %s for customer %s: %s kg x %s = %s",
        order.id, customer_id, quantity_kg, unit_price, order.total_amount,
    )
    return order


def get_sales_order_by_id(*, order_id: UUID) -> SalesOrder:
    """
    Retrieve a sales order with its customer and invoice.

    Raises:
        SalesOrderNotFoundError: If order doesn't exist
    """
    try:
        return SalesOrder.objects.select_related('customer', 'invoice').get(id=order_id)
    except SalesOrder.DoesNotExist:
        raise SalesOrderNotFoundError("Sales order not found")


@transaction.atomic
def update_sales_order(
    *,
    order_id: UUID,
    customer_id: Optional[UUID] = None,
    product: Optional[str] = None,
    grade: Optional[str] = None,
    quantity_kg: Optional[Decimal] = None,
    unit_price: Optional[Decimal] = None,
    shipping_status: Optional[str] = None,
    order_date: Optional[date] = None,
    total_amount: Optional[Decimal] = None,
) -> SalesOrder:
    """
    Update a sales order. Fields left as None are not changed.

    A total_amount passed in is ignored and the total is recomputed from
    quantity and unit price. Documents and the invoice link are preserved.

    Raises:
        SalesOrderNotFoundError: If order doesn't exist
        CustomerNotFoundError: If the new customer doesn't exist
        InvalidSalesOrderDataError: If a value is invalid
        RecordStoreError: If the database write fails
    """
    try:
        order = SalesOrder.objects.select_for_update().get(id=order_id)
    except SalesOrder.DoesNotExist:
        raise SalesOrderNotFoundError("Sales order not found")

    if total_amount is not None:
        logger.debug("Ignoring supplied total %s for order %s", total_amount, order_id)

    _validate_amounts(quantity_kg, unit_price)

    if customer_id is not None:
        order.customer = _get_customer(customer_id)
    if product is not None:
        order.product = product
    if grade is not None:
        order.grade = grade
    if quantity_kg is not None:
        order.quantity_kg = quantity_kg
    if unit_price is not None:
        order.unit_price = unit_price
    if shipping_status is not None:
        if shipping_status not in ShippingStatus.values:
            raise InvalidSalesOrderDataError(f"Unknown shipping status: {shipping_status}")
        order.shipping_status = shipping_status
    if order_date is not None:
        order.order_date = order_date

    _save(order)
    return order


@transaction.atomic
def delete_sales_order(*, order_id: UUID) -> None:
    """
    Delete a sales order.

    A generated invoice survives with its order reference cleared, and
    expenses tied to the order lose the link.

    Raises:
        SalesOrderNotFoundError: If order doesn't exist
        RecordStoreError: If the database write fails
    """
    try:
        order = SalesOrder.objects.get(id=order_id)
    except SalesOrder.DoesNotExist:
        raise SalesOrderNotFoundError("Sales order not found")

    try:
        order.delete()
    except DatabaseError:
        logger.exception("Failed to delete sales order %s", order_id)
        raise RecordStoreError()

    logger.info("Deleted sales order %s", order_id)


def get_sales_orders(
    *,
    customer_id: Optional[UUID] = None,
    shipping_status: Optional[str] = None,
) -> QuerySet[SalesOrder]:
    """List sales orders in insertion order, optionally filtered."""
    queryset = SalesOrder.objects.select_related('customer', 'invoice')

    if customer_id:
        queryset = queryset.filter(customer_id=customer_id)

    if shipping_status:
        queryset = queryset.filter(shipping_status=shipping_status)

    return queryset.order_by('created_at')


@transaction.atomic
def add_order_document(*, order_id: UUID, name: str, document_type: str) -> SalesOrder:
    """
    Attach document metadata (name and type) to an order.

    Only metadata is recorded; file contents are not stored.

    Raises:
        SalesOrderNotFoundError: If order doesn't exist
        InvalidSalesOrderDataError: If name or type is blank
    """
    if not name or not name.strip():
        raise InvalidSalesOrderDataError("Document name is required")
    if not document_type or not document_type.strip():
        raise InvalidSalesOrderDataError("Document type is required")

    try:
        order = SalesOrder.objects.select_for_update().get(id=order_id)
    except SalesOrder.DoesNotExist:
        raise SalesOrderNotFoundError("Sales order not found")

    order.documents = list(order.documents) + [
        {'name': name.strip(), 'type': document_type.strip()}
    ]
    _save(order)
    return order
