from django.contrib import admin

from .models import CartItem, Dispute, Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ('seller', 'product', 'variant', 'unit_price', 'quantity', 'total_price', 'commission_amount')

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        'order_number',
        'buyer',
        'status',
        'payment_status',
        'total_amount',
        'currency',
        'created_at',
    )
    list_filter = ('status', 'payment_status', 'created_at')
    search_fields = ('order_number', 'buyer__email')
    inlines = [OrderItemInline]

    # Money and snapshots are never edited from admin
    readonly_fields = (
        'id',
        'order_number',
        'buyer',
        'total_amount',
        'currency',
        'shipping_address',
        'billing_address',
        'created_at',
        'updated_at',
    )


@admin.register(OrderItem)
class OrderItemAdmin(admin.ModelAdmin):
    list_display = ('order', 'seller', 'product', 'quantity', 'total_price', 'commission_amount', 'status')
    list_filter = ('status',)
    search_fields = ('order__order_number', 'product__name', 'tracking_number')


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ('user', 'product', 'variant', 'quantity', 'price', 'created_at')
    search_fields = ('user__email', 'product__name')


@admin.register(Dispute)
class DisputeAdmin(admin.ModelAdmin):
    list_display = ('order', 'raised_by', 'dispute_type', 'status', 'created_at', 'resolved_at')
    list_filter = ('status', 'dispute_type')
    search_fields = ('order__order_number', 'raised_by__email')
