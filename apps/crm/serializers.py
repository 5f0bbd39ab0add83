from rest_framework import serializers
from .models import (
    Customer,
    Interaction,
    CoffeeOrigin,
    Certification,
    CustomerStatus,
    InteractionType,
)


# =============================================================================
# Input Serializers
# =============================================================================

class CustomerFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for customer filtering.

    Query Parameters:
        status (str): Filter by customer status
        origin (str): Filter by preferred coffee origin
        follow_up_overdue (bool): Only customers whose follow-up date passed
    """

    status = serializers.ChoiceField(choices=CustomerStatus.choices, required=False)
    origin = serializers.ChoiceField(choices=CoffeeOrigin.choices, required=False)
    follow_up_overdue = serializers.BooleanField(required=False, allow_null=True, default=None)


class InteractionCreateSerializer(serializers.Serializer):
    """Validate input for appending an interaction."""

    date = serializers.DateField()
    type = serializers.ChoiceField(choices=InteractionType.choices)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


# =============================================================================
# Output Serializers
# =============================================================================

class InteractionSerializer(serializers.ModelSerializer):
    """Logged customer interaction."""

    class Meta:
        model = Interaction
        fields = ['id', 'date', 'type', 'notes', 'created_at']
        read_only_fields = fields


class CustomerSerializer(serializers.ModelSerializer):
    """Full customer record with interaction history."""

    certifications_required = serializers.ListField(
        child=serializers.ChoiceField(choices=Certification.choices),
        required=False,
    )
    interactions = InteractionSerializer(many=True, read_only=True)
    is_follow_up_overdue = serializers.SerializerMethodField()

    class Meta:
        model = Customer
        fields = [
            'id',
            'company_name',
            'contact_person',
            'country',
            'email',
            'phone',
            'preferred_origin',
            'certifications_required',
            'status',
            'assigned_sales_rep',
            'notes',
            'next_follow_up_date',
            'is_follow_up_overdue',
            'interactions',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'interactions', 'created_at', 'updated_at']

    def get_is_follow_up_overdue(self, obj) -> bool:
        return obj.is_follow_up_overdue()


class CustomerListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for customer lists."""

    interaction_count = serializers.SerializerMethodField()
    is_follow_up_overdue = serializers.SerializerMethodField()

    class Meta:
        model = Customer
        fields = [
            'id',
            'company_name',
            'contact_person',
            'country',
            'preferred_origin',
            'certifications_required',
            'status',
            'assigned_sales_rep',
            'next_follow_up_date',
            'is_follow_up_overdue',
            'interaction_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_interaction_count(self, obj) -> int:
        return len(obj.interactions.all())

    def get_is_follow_up_overdue(self, obj) -> bool:
        return obj.is_follow_up_overdue()
