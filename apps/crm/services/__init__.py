"""
CRM app services layer.

Customer records and their interaction history. State-changing operations
run in transactions and lock the rows they modify.
"""

from .exceptions import (
    CrmServiceError,
    CustomerNotFoundError,
    InvalidCustomerDataError,
    InvalidInteractionError,
    CustomerHasOrdersError,
    RecordStoreError,
)

from .customer_management import (
    UNSET,
    create_customer,
    get_customer_by_id,
    update_customer,
    delete_customer,
    get_customers,
)

from .interaction_management import (
    log_interaction,
    get_customer_interactions,
)


__all__ = [
    # Exceptions
    'CrmServiceError',
    'CustomerNotFoundError',
    'InvalidCustomerDataError',
    'InvalidInteractionError',
    'CustomerHasOrdersError',
    'RecordStoreError',
    # Customer management
    'UNSET',
    'create_customer',
    'get_customer_by_id',
    'update_customer',
    'delete_customer',
    'get_customers',
    # Interactions
    'log_interaction',
    'get_customer_interactions',
]
