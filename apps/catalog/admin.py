# apps/catalog/admin.py
from django.contrib import admin

from .models import Category, Product, ProductImage, ProductVariant


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "parent", "sort_order")
    list_filter = ("parent",)
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}
    ordering = ("sort_order", "name")


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 0


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "seller",
        "category",
        "base_price",
        "status",
        "featured",
        "rating_average",
        "sales_count",
    )
    search_fields = ("name", "slug", "seller__business_name")
    list_filter = ("status", "featured", "category")
    list_editable = ("status", "featured")
    readonly_fields = ("slug", "view_count", "sales_count", "rating_average", "rating_count", "created_at", "updated_at")
    inlines = [ProductImageInline, ProductVariantInline]


@admin.register(ProductVariant)
class ProductVariantAdmin(admin.ModelAdmin):
    list_display = ("sku", "name", "product", "price", "stock_quantity", "status")
    search_fields = ("sku", "name", "product__name")
    list_filter = ("status",)
