from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from rest_framework.exceptions import NotFound

from .models import Address

User = get_user_model()


class CustomerService:

    @staticmethod
    def list_addresses(user):
        return Address.objects.filter(user=user).order_by("-is_default", "-created_at")

    @staticmethod
    def get_address(user, address_id) -> Address:
        try:
            return Address.objects.get(id=address_id, user=user)
        except (Address.DoesNotExist, DjangoValidationError):
            raise NotFound("Address not found.")

    @staticmethod
    @transaction.atomic
    def create_address(user, is_default: bool = False, **fields) -> Address:
        # 1. Lock user row so two parallel creates don't both become default
        User.objects.select_for_update().filter(pk=user.pk).first()

        # 2. First address is ALWAYS default
        if not Address.objects.filter(user=user).exists():
            is_default = True

        # 3. If new one is default, unset others
        if is_default:
            Address.objects.filter(user=user, is_default=True).update(is_default=False)

        return Address.objects.create(user=user, is_default=is_default, **fields)

    @staticmethod
    @transaction.atomic
    def set_default_address(user, address_id) -> Address:
        target = CustomerService.get_address(user, address_id)

        if target.is_default:
            return target

        Address.objects.filter(user=user, is_default=True).update(is_default=False)

        target.is_default = True
        target.save(update_fields=["is_default"])
        return target

    @staticmethod
    @transaction.atomic
    def delete_address(user, address_id) -> None:
        address = CustomerService.get_address(user, address_id)
        was_default = address.is_default
        address.delete()

        # Default hata to sabse naya address default ban jaye
        if was_default:
            replacement = Address.objects.filter(user=user).order_by("-created_at").first()
            if replacement:
                replacement.is_default = True
                replacement.save(update_fields=["is_default"])
