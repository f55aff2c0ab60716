from django.contrib import admin

from .models import Address


@admin.register(Address)
class AddressAdmin(admin.ModelAdmin):
    list_display = ("full_name", "user", "city", "postal_code", "country", "is_default")
    list_filter = ("country", "is_default")
    search_fields = ("user__email", "full_name", "postal_code")
