from django.db import models
from django.utils import timezone
import uuid


class CoffeeOrigin(models.TextChoices):
    SIDAMA = 'sidama', 'Sidama'
    YIRGACHEFFE = 'yirgacheffe', 'Yirgacheffe'
    GUJI = 'guji', 'Guji'
    HARRAR = 'harrar', 'Harrar'
    LIMU = 'limu', 'Limu'
    OTHER = 'other', 'Other'


class Certification(models.TextChoices):
    ORGANIC = 'organic', 'Organic'
    FAIR_TRADE = 'fair_trade', 'Fair Trade'
    RAINFOREST_ALLIANCE = 'rainforest_alliance', 'Rainforest Alliance'
    UTZ = 'utz', 'UTZ Certified'


class CustomerStatus(models.TextChoices):
    LEAD = 'lead', 'Lead'
    ACTIVE = 'active', 'Active'
    REPEAT = 'repeat', 'Repeat'
    DORMANT = 'dormant', 'Dormant'


class InteractionType(models.TextChoices):
    CALL = 'call', 'Call'
    SAMPLE = 'sample', 'Sample'
    EMAIL = 'email', 'Email'
    MEETING = 'meeting', 'Meeting'


class Customer(models.Model):
    """Importer / roaster buying green coffee from us."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Company & contact
    company_name = models.CharField(max_length=200)
    contact_person = models.CharField(max_length=200, blank=True)
    country = models.CharField(max_length=100, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=50, blank=True)

    # Buying preferences
    preferred_origin = models.CharField(
        max_length=20,
        choices=CoffeeOrigin.choices,
        default=CoffeeOrigin.OTHER
    )
    # List of Certification values, de-duplicated by the service layer
    certifications_required = models.JSONField(default=list, blank=True)

    # Pipeline
    status = models.CharField(
        max_length=20,
        choices=CustomerStatus.choices,
        default=CustomerStatus.LEAD
    )
    assigned_sales_rep = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)
    next_follow_up_date = models.DateField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customers'
        indexes = [
            models.Index(fields=['status'], name='customers_status_idx'),
            models.Index(fields=['preferred_origin'], name='customers_origin_idx'),
            models.Index(fields=['next_follow_up_date'], name='customers_follow_up_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return self.company_name

    def is_follow_up_overdue(self, today=None):
        """True when a follow-up date is set and already in the past."""
        today = today or timezone.localdate()
        return self.next_follow_up_date is not None and self.next_follow_up_date < today


class Interaction(models.Model):
    """Logged touchpoint with a customer. Append-only."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    customer = models.ForeignKey(
        Customer,
        on_delete=models.CASCADE,
        related_name='interactions'
    )
    date = models.DateField()
    type = models.CharField(max_length=20, choices=InteractionType.choices)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'customer_interactions'
        indexes = [
            models.Index(fields=['customer', 'created_at'], name='interactions_customer_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.get_type_display()} with {self.customer.company_name} on {self.date}"
