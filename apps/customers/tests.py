from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.utils.testing import make_address, make_user

from .models import Address
from .services import CustomerService


class AddressServiceTests(APITestCase):
    def setUp(self):
        self.user = make_user()
        self.fields = {
            "full_name": "Buyer",
            "phone": "+1 555 0100",
            "address_line1": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "postal_code": "62701",
        }

    def test_first_address_is_default(self):
        address = CustomerService.create_address(self.user, is_default=False, **self.fields)
        self.assertTrue(address.is_default)
        self.assertEqual(address.country, "USA")

    def test_new_default_unsets_previous(self):
        first = CustomerService.create_address(self.user, **self.fields)
        second = CustomerService.create_address(self.user, is_default=True, **self.fields)

        first.refresh_from_db()
        self.assertFalse(first.is_default)
        self.assertTrue(second.is_default)
        self.assertEqual(Address.objects.filter(user=self.user, is_default=True).count(), 1)

    def test_deleting_default_promotes_another(self):
        first = CustomerService.create_address(self.user, **self.fields)
        second = CustomerService.create_address(self.user, **self.fields)

        CustomerService.delete_address(self.user, first.id)

        second.refresh_from_db()
        self.assertTrue(second.is_default)


class AddressAPITests(APITestCase):
    def setUp(self):
        self.user = make_user()
        self.client.force_authenticate(self.user)
        self.list_url = reverse("customer-addresses-list")

    def test_create_and_list(self):
        resp = self.client.post(self.list_url, {
            "full_name": "Buyer",
            "phone": "+1 555 0100",
            "address_line1": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "postal_code": "62701",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)

        resp = self.client.get(self.list_url)
        self.assertEqual(len(resp.data), 1)
        self.assertTrue(resp.data[0]["is_default"])

    def test_set_default(self):
        make_address(self.user, is_default=True)
        other = make_address(self.user, city="Shelbyville")

        resp = self.client.post(reverse("customer-addresses-set-default", args=[other.id]))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertTrue(resp.data["is_default"])
        self.assertEqual(Address.objects.get(user=self.user, is_default=True).id, other.id)

    def test_cannot_touch_someone_elses_address(self):
        stranger = make_user(email="other@example.com")
        address = make_address(stranger)

        resp = self.client.delete(reverse("customer-addresses-detail", args=[address.id]))

        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Address.objects.filter(id=address.id).exists())
