"""Interaction logging service - append-only history of customer touchpoints."""

import logging
from datetime import date
from uuid import UUID

from django.db import transaction, DatabaseError
from django.db.models import QuerySet

from apps.crm.models import Customer, Interaction, InteractionType
from .exceptions import CustomerNotFoundError, InvalidInteractionError, RecordStoreError

logger = logging.getLogger(__name__)


@transaction.atomic
def log_interaction(
    *,
    customer_id: UUID,
    interaction_date: date,
    interaction_type: str,
    notes: str = '',
) -> Interaction:
    """
    Append an interaction to a customer's history.

    The customer row is locked so concurrent appends keep a consistent order.

    Args:
        customer_id: Customer the interaction belongs to
        interaction_date: Day the interaction happened
        interaction_type: InteractionType value
        notes: Free-form notes

    Returns:
        Created Interaction instance

    Raises:
        CustomerNotFoundError: If customer doesn't exist
        InvalidInteractionError: If the type is unknown or the date missing
        RecordStoreError: If the database write fails
    """
    try:
        customer = Customer.objects.select_for_update().get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError("Customer not found")

    if interaction_type not in InteractionType.values:
        raise InvalidInteractionError(f"Unknown interaction type: {interaction_type}")
    if interaction_date is None:
        raise InvalidInteractionError("Interaction date is required")

    try:
        interaction = Interaction.objects.create(
            customer=customer,
            date=interaction_date,
            type=interaction_type,
            notes=notes,
        )
    except DatabaseError:
        logger.exception("Failed to log interaction for customer %s", customer_id)
        raise RecordStoreError()

    logger.info(
        "Logged %s interaction for customer %s", interaction_type, customer_id
    )
    return interaction


def get_customer_interactions(*, customer_id: UUID) -> QuerySet[Interaction]:
    """Return a customer's interactions oldest first."""
    if not Customer.objects.filter(id=customer_id).exists():
        raise CustomerNotFoundError("Customer not found")
    return Interaction.objects.filter(customer_id=customer_id).order_by('created_at')
