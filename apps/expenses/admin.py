from django.contrib import admin
from .models import Expense


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ['date', 'expense_type', 'amount', 'paid_to', 'related_order', 'is_approved']
    list_filter = ['expense_type', 'is_approved']
    search_fields = ['paid_to', 'description']
    readonly_fields = ['created_at', 'updated_at']
