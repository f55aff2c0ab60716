from django.contrib import admin

from .models import ProductReview


@admin.register(ProductReview)
class ProductReviewAdmin(admin.ModelAdmin):
    list_display = ("product", "user", "rating", "verified_purchase", "helpful_count", "created_at")
    list_filter = ("rating", "verified_purchase")
    search_fields = ("product__name", "user__email", "title")
