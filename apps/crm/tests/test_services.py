"""
Service layer unit tests for crm app.

Tests cover:
- Customer CRUD and validation
- Certification normalization
- Follow-up filtering
- Append-only interaction history
- Database failures surfacing as RecordStoreError
"""

import pytest
from datetime import date
from uuid import uuid4
from unittest.mock import patch
from django.db import DatabaseError

from apps.crm.models import Customer, Interaction, CustomerStatus, CoffeeOrigin
from apps.crm.services import (
    create_customer,
    get_customer_by_id,
    update_customer,
    delete_customer,
    get_customers,
    log_interaction,
    get_customer_interactions,
)
from apps.crm.services.exceptions import (
    CustomerNotFoundError,
    InvalidCustomerDataError,
    InvalidInteractionError,
    RecordStoreError,
)


@pytest.mark.django_db
class TestCustomerManagement:
    """Tests for customer_management.py service functions."""

    def test_create_customer_defaults(self):
        customer = create_customer(company_name='  Kaffa Imports  ')

        assert customer.company_name == 'Kaffa Imports'
        assert customer.status == CustomerStatus.LEAD
        assert customer.preferred_origin == CoffeeOrigin.OTHER
        assert customer.certifications_required == []
        assert customer.next_follow_up_date is None
        assert customer.interactions.count() == 0

    def test_create_customer_deduplicates_certifications(self):
        customer = create_customer(
            company_name='Kaffa Imports',
            certifications_required=['organic', 'fair_trade', 'organic'],
        )

        assert customer.certifications_required == ['organic', 'fair_trade']

    def test_create_customer_rejects_unknown_certification(self):
        with pytest.raises(InvalidCustomerDataError):
            create_customer(company_name='Kaffa', certifications_required=['kosher'])

    def test_create_customer_requires_company_name(self):
        with pytest.raises(InvalidCustomerDataError):
            create_customer(company_name='   ')

    def test_create_customer_rejects_unknown_status(self):
        with pytest.raises(InvalidCustomerDataError):
            create_customer(company_name='Kaffa', status='vip')

    def test_get_customer_by_id_not_found(self):
        with pytest.raises(CustomerNotFoundError):
            get_customer_by_id(customer_id=uuid4())

    def test_update_customer_changes_only_given_fields(self, customer):
        updated = update_customer(customer_id=customer.id, status=CustomerStatus.REPEAT)

        assert updated.status == CustomerStatus.REPEAT
        assert updated.company_name == 'Nordic Roasters AB'
        assert updated.next_follow_up_date == date(2024, 3, 1)

    def test_update_customer_clears_follow_up(self, customer):
        updated = update_customer(customer_id=customer.id, next_follow_up_date=None)

        assert updated.next_follow_up_date is None

    def test_update_customer_keeps_interactions(self, customer):
        log_interaction(
            customer_id=customer.id,
            interaction_date=date(2024, 1, 5),
            interaction_type='call',
        )

        update_customer(customer_id=customer.id, notes='Prefers washed lots')

        assert customer.interactions.count() == 1

    def test_update_customer_not_found(self):
        with pytest.raises(CustomerNotFoundError):
            update_customer(customer_id=uuid4(), notes='x')

    def test_delete_customer_removes_interactions(self, customer):
        log_interaction(
            customer_id=customer.id,
            interaction_date=date(2024, 1, 5),
            interaction_type='email',
        )

        delete_customer(customer_id=customer.id)

        assert not Customer.objects.filter(id=customer.id).exists()
        assert Interaction.objects.count() == 0

    def test_delete_customer_not_found(self):
        with pytest.raises(CustomerNotFoundError):
            delete_customer(customer_id=uuid4())

    def test_save_failure_raises_record_store_error(self):
        with patch.object(Customer, 'save', side_effect=DatabaseError('disk full')):
            with pytest.raises(RecordStoreError):
                create_customer(company_name='Kaffa Imports')


@pytest.mark.django_db
class TestCustomerListing:
    """Tests for get_customers() filters."""

    def test_lists_in_insertion_order(self, customer, lead_customer):
        names = [c.company_name for c in get_customers()]

        assert names == ['Nordic Roasters AB', 'Bay Area Coffee Co']

    def test_filter_by_status(self, customer, lead_customer):
        result = list(get_customers(status=CustomerStatus.LEAD))

        assert result == [lead_customer]

    def test_filter_by_origin(self, customer, lead_customer):
        result = list(get_customers(preferred_origin=CoffeeOrigin.YIRGACHEFFE))

        assert result == [customer]

    def test_filter_follow_up_overdue(self, customer, lead_customer):
        overdue = list(get_customers(follow_up_overdue=True, today=date(2024, 3, 2)))
        not_overdue = list(get_customers(follow_up_overdue=False, today=date(2024, 3, 2)))

        assert overdue == [customer]
        assert not_overdue == [lead_customer]

    def test_follow_up_due_today_is_not_overdue(self, customer):
        assert customer.is_follow_up_overdue(today=date(2024, 3, 1)) is False
        assert customer.is_follow_up_overdue(today=date(2024, 3, 2)) is True

    def test_no_follow_up_date_is_never_overdue(self, lead_customer):
        assert lead_customer.is_follow_up_overdue(today=date(2030, 1, 1)) is False


@pytest.mark.django_db
class TestInteractionLogging:
    """Tests for interaction_management.py service functions."""

    def test_interactions_are_appended_in_order(self, customer):
        first = log_interaction(
            customer_id=customer.id,
            interaction_date=date(2024, 2, 1),
            interaction_type='sample',
            notes='Sent 3 samples',
        )
        second = log_interaction(
            customer_id=customer.id,
            interaction_date=date(2024, 1, 15),
            interaction_type='meeting',
        )

        assert list(get_customer_interactions(customer_id=customer.id)) == [first, second]

    def test_rejects_unknown_type(self, customer):
        with pytest.raises(InvalidInteractionError):
            log_interaction(
                customer_id=customer.id,
                interaction_date=date(2024, 2, 1),
                interaction_type='fax',
            )

    def test_unknown_customer(self):
        with pytest.raises(CustomerNotFoundError):
            log_interaction(
                customer_id=uuid4(),
                interaction_date=date(2024, 2, 1),
                interaction_type='call',
            )
