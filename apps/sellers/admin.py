from django.contrib import admin

from .models import Seller, SellerPayout


class SellerPayoutInline(admin.TabularInline):
    model = SellerPayout
    extra = 0
    readonly_fields = ("created_at",)


@admin.register(Seller)
class SellerAdmin(admin.ModelAdmin):
    list_display = ("business_name", "user", "verification_status", "trust_score", "total_sales", "status", "created_at")
    list_filter = ("verification_status", "status")
    search_fields = ("business_name", "user__email")
    readonly_fields = ("total_sales", "created_at")
    inlines = [SellerPayoutInline]
    actions = ["mark_verified", "mark_rejected"]

    @admin.action(description="Mark selected sellers as verified")
    def mark_verified(self, request, queryset):
        queryset.update(verification_status="verified")

    @admin.action(description="Mark selected sellers as rejected")
    def mark_rejected(self, request, queryset):
        queryset.update(verification_status="rejected")


@admin.register(SellerPayout)
class SellerPayoutAdmin(admin.ModelAdmin):
    list_display = ("seller", "amount", "currency", "status", "payout_date", "created_at")
    list_filter = ("status", "currency")
    search_fields = ("seller__business_name", "reference")
