from django.contrib import admin
from .models import Customer, Interaction


class InteractionInline(admin.TabularInline):
    model = Interaction
    extra = 0
    readonly_fields = ['created_at']


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = [
        'company_name',
        'country',
        'preferred_origin',
        'status',
        'assigned_sales_rep',
        'next_follow_up_date',
    ]
    list_filter = ['status', 'preferred_origin']
    search_fields = ['company_name', 'contact_person', 'email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [InteractionInline]


@admin.register(Interaction)
class InteractionAdmin(admin.ModelAdmin):
    list_display = ['customer', 'type', 'date', 'created_at']
    list_filter = ['type']
    search_fields = ['customer__company_name', 'notes']
