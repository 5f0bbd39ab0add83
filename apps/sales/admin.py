from django.contrib import admin
from .models import SalesOrder


@admin.register(SalesOrder)
class SalesOrderAdmin(admin.ModelAdmin):
    list_display = [
        'product',
        'customer',
        'quantity_kg',
        'unit_price',
        'total_amount',
        'shipping_status',
        'order_date',
    ]
    list_filter = ['shipping_status']
    search_fields = ['product', 'customer__company_name']
    readonly_fields = ['total_amount', 'created_at', 'updated_at']
