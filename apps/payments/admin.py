from django.contrib import admin

from .models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ('order', 'transaction_type', 'amount', 'currency', 'payment_method', 'status', 'created_at')
    list_filter = ('transaction_type', 'status', 'payment_method')
    search_fields = ('order__order_number', 'gateway_reference')
    readonly_fields = ('created_at',)
