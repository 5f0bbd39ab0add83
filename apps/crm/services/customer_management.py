"""Customer management service - CRUD operations for customers."""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.db import transaction, DatabaseError
from django.db.models import ProtectedError, QuerySet
from django.utils import timezone

from apps.crm.models import Customer, CoffeeOrigin, Certification, CustomerStatus
from .exceptions import (
    CustomerNotFoundError,
    InvalidCustomerDataError,
    CustomerHasOrdersError,
    RecordStoreError,
)

logger = logging.getLogger(__name__)

# Distinguishes "leave unchanged" from an explicit None for nullable fields
UNSET = object()


def _normalize_certifications(certifications) -> list[str]:
    """Validate certification values and drop duplicates, keeping order."""
    normalized = []
    for value in certifications or []:
        if value not in Certification.values:
            raise InvalidCustomerDataError(f"Unknown certification: {value}")
        if value not in normalized:
            normalized.append(value)
    return normalized


def _validate_choices(*, preferred_origin=None, status=None):
    if preferred_origin is not None and preferred_origin not in CoffeeOrigin.values:
        raise InvalidCustomerDataError(f"Unknown coffee origin: {preferred_origin}")
    if status is not None and status not in CustomerStatus.values:
        raise InvalidCustomerDataError(f"Unknown customer status: {status}")


def _save(customer: Customer, **kwargs) -> None:
    try:
        customer.save(**kwargs)
    except DatabaseError:
        logger.exception("Failed to save customer %s", customer.id)
        raise RecordStoreError()


@transaction.atomic
def create_customer(
    *,
    company_name: str,
    contact_person: str = '',
    country: str = '',
    email: str = '',
    phone: str = '',
    preferred_origin: str = CoffeeOrigin.OTHER,
    certifications_required: Optional[list[str]] = None,
    status: str = CustomerStatus.LEAD,
    assigned_sales_rep: str = '',
    notes: str = '',
    next_follow_up_date: Optional[date] = None,
) -> Customer:
    """
    Create a new customer record.

    Customers start with an empty interaction history; interactions are
    appended later through log_interaction().

    Args:
        company_name: Company name (required)
        contact_person: Main contact at the company
        country: Destination country
        email: Contact email
        phone: Contact phone
        preferred_origin: CoffeeOrigin value
        certifications_required: List of Certification values
        status: CustomerStatus value
        assigned_sales_rep: Sales rep responsible for the account
        notes: Free-form notes
        next_follow_up_date: When the rep should next reach out

    Returns:
        Created Customer instance

    Raises:
        InvalidCustomerDataError: If company name is blank or a choice is unknown
        RecordStoreError: If the database write fails
    """
    if not company_name or not company_name.strip():
        raise InvalidCustomerDataError("Company name is required")

    _validate_choices(preferred_origin=preferred_origin, status=status)

    customer = Customer(
        company_name=company_name.strip(),
        contact_person=contact_person,
        country=country,
        email=email,
        phone=phone,
        preferred_origin=preferred_origin,
        certifications_required=_normalize_certifications(certifications_required),
        status=status,
        assigned_sales_rep=assigned_sales_rep,
        notes=notes,
        next_follow_up_date=next_follow_up_date,
    )
    _save(customer)

    logger.info("Created customer %s (%s)", customer.id, customer.company_name)
    return customer


def get_customer_by_id(*, customer_id: UUID) -> Customer:
    """
    Retrieve a customer with its interactions prefetched.

    Raises:
        CustomerNotFoundError: If customer doesn't exist
    """
    try:
        return Customer.objects.prefetch_related('interactions').get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError("Customer not found")


@transaction.atomic
def update_customer(
    *,
    customer_id: UUID,
    company_name: Optional[str] = None,
    contact_person: Optional[str] = None,
    country: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    preferred_origin: Optional[str] = None,
    certifications_required: Optional[list[str]] = None,
    status: Optional[str] = None,
    assigned_sales_rep: Optional[str] = None,
    notes: Optional[str] = None,
    next_follow_up_date=UNSET,
) -> Customer:
    """
    Update an existing customer. Fields left as None are not changed.

    ``next_follow_up_date`` may be passed as None to clear the reminder.
    Interactions are never touched here.

    Raises:
        CustomerNotFoundError: If customer doesn't exist
        InvalidCustomerDataError: If a value is invalid
        RecordStoreError: If the database write fails
    """
    try:
        customer = Customer.objects.select_for_update().get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError("Customer not found")

    _validate_choices(preferred_origin=preferred_origin, status=status)

    if company_name is not None:
        if not company_name.strip():
            raise InvalidCustomerDataError("Company name is required")
        customer.company_name = company_name.strip()
    if contact_person is not None:
        customer.contact_person = contact_person
    if country is not None:
        customer.country = country
    if email is not None:
        customer.email = email
    if phone is not None:
        customer.phone = phone
    if preferred_origin is not None:
        customer.preferred_origin = preferred_origin
    if certifications_required is not None:
        customer.certifications_required = _normalize_certifications(certifications_required)
    if status is not None:
        customer.status = status
    if assigned_sales_rep is not None:
        customer.assigned_sales_rep = assigned_sales_rep
    if notes is not None:
        customer.notes = notes
    if next_follow_up_date is not UNSET:
        customer.next_follow_up_date = next_follow_up_date

    _save(customer)
    return customer


@transaction.atomic
def delete_customer(*, customer_id: UUID) -> None:
    """
    Delete a customer and its interaction history.

    Sales orders and invoices reference customers without cascading, so a
    customer that still has either cannot be deleted.

    Raises:
        CustomerNotFoundError: If customer doesn't exist
        CustomerHasOrdersError: If orders or invoices still reference the customer
        RecordStoreError: If the database write fails
    """
    try:
        customer = Customer.objects.get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError("Customer not found")

    try:
        customer.delete()
    except ProtectedError:
        raise CustomerHasOrdersError(
            "Customer still has sales orders or invoices and cannot be deleted."
        )
    except DatabaseError:
        logger.exception("Failed to delete customer %s", customer_id)
        raise RecordStoreError()

    logger.info("Deleted customer %s", customer_id)


def get_customers(
    *,
    status: Optional[str] = None,
    preferred_origin: Optional[str] = None,
    follow_up_overdue: Optional[bool] = None,
    today: Optional[date] = None,
) -> QuerySet[Customer]:
    """
    List customers in insertion order with optional filters.

    Args:
        status: Filter by CustomerStatus
        preferred_origin: Filter by CoffeeOrigin
        follow_up_overdue: True for customers whose follow-up date has
            passed, False for the rest
        today: Reference date for the follow-up check (defaults to today)
    """
    queryset = Customer.objects.prefetch_related('interactions')

    if status:
        queryset = queryset.filter(status=status)

    if preferred_origin:
        queryset = queryset.filter(preferred_origin=preferred_origin)

    if follow_up_overdue is not None:
        today = today or timezone.localdate()
        if follow_up_overdue:
            queryset = queryset.filter(next_follow_up_date__lt=today)
        else:
            queryset = queryset.exclude(next_follow_up_date__lt=today)

    return queryset.order_by('created_at')
