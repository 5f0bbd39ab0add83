from django.contrib import admin
from .models import Invoice, InvoiceSequence


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = [
        'invoice_number',
        'customer',
        'amount_due',
        'amount_paid',
        'status',
        'due_date',
        'date_paid',
    ]
    list_filter = ['status', 'payment_method']
    search_fields = ['invoice_number', 'customer__company_name']
    readonly_fields = ['invoice_number', 'created_at', 'updated_at']


@admin.register(InvoiceSequence)
class InvoiceSequenceAdmin(admin.ModelAdmin):
    list_display = ['year', 'last_value']
