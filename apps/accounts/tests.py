# apps/accounts/tests.py
import os
from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from apps.utils.testing import PASSWORD, make_product, make_seller, make_user

from .models import Role, User


class RegisterTests(APITestCase):
    url = reverse("auth-register")

    def test_register_buyer_returns_tokens(self):
        resp = self.client.post(self.url, {
            "email": "New.Buyer@Example.com",
            "password": PASSWORD,
            "full_name": "New Buyer",
        }, format="json")

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertIn("access", resp.data)
        self.assertEqual(resp.data["user"]["role"], Role.BUYER)
        self.assertTrue(User.objects.filter(email="new.buyer@example.com").exists())

    def test_register_seller_role(self):
        resp = self.client.post(self.url, {
            "email": "shop@example.com",
            "password": PASSWORD,
            "full_name": "Shop Owner",
            "role": "seller",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(AccessToken(resp.data["access"])["role"], Role.SELLER)

    def test_cannot_self_register_as_admin(self):
        resp = self.client.post(self.url, {
            "email": "sneaky@example.com",
            "password": PASSWORD,
            "full_name": "Sneaky",
            "role": "admin",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.filter(email="sneaky@example.com").exists())

    def test_duplicate_email_rejected(self):
        make_user(email="taken@example.com")
        resp = self.client.post(self.url, {
            "email": "TAKEN@example.com",
            "password": PASSWORD,
            "full_name": "Again",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)


class LoginTests(APITestCase):
    def test_login_token_carries_role(self):
        make_seller(email="seller@example.com")
        resp = self.client.post(reverse("auth-login"), {
            "email": "seller@example.com",
            "password": PASSWORD,
        }, format="json")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(AccessToken(resp.data["access"])["role"], Role.SELLER)
        self.assertEqual(resp.data["user"]["email"], "seller@example.com")

    def test_wrong_password(self):
        make_user(email="buyer@example.com")
        resp = self.client.post(reverse("auth-login"), {
            "email": "buyer@example.com",
            "password": "wrong-password",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)


class MeTests(APITestCase):
    def setUp(self):
        self.user = make_user()
        self.client.force_authenticate(self.user)

    def test_get_me(self):
        resp = self.client.get(reverse("user-me"))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["email"], self.user.email)

    def test_update_profile_but_not_role(self):
        resp = self.client.patch(reverse("user-me"), {
            "full_name": "Renamed",
            "phone": "+1 555 0100",
            "role": "admin",
        }, format="json")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.full_name, "Renamed")
        self.assertEqual(self.user.role, Role.BUYER)

    def test_requires_auth(self):
        self.client.force_authenticate(None)
        resp = self.client.get(reverse("user-me"))
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)


class DashboardTests(APITestCase):
    url = reverse("user-dashboard")

    def test_buyer_gets_product_feed(self):
        seller = make_seller()
        make_product(seller, name="Lamp")
        make_product(seller, name="Hidden", status="draft")
        self.client.force_authenticate(make_user())

        resp = self.client.get(self.url)

        self.assertEqual(resp.data["role"], Role.BUYER)
        names = [p["name"] for p in resp.data["dashboard"]["products"]]
        self.assertEqual(names, ["Lamp"])

    def test_seller_without_record_must_onboard(self):
        self.client.force_authenticate(make_user(email="new@example.com", role=Role.SELLER))
        resp = self.client.get(self.url)
        self.assertEqual(resp.data["dashboard"], {"onboarding_required": True})

    def test_seller_gets_stats(self):
        seller = make_seller()
        make_product(seller)
        self.client.force_authenticate(seller.user)

        resp = self.client.get(self.url)

        self.assertEqual(resp.data["role"], Role.SELLER)
        self.assertEqual(resp.data["dashboard"]["total_products"], 1)
        self.assertEqual(resp.data["dashboard"]["total_orders"], 0)

    def test_admin_gets_platform_stats(self):
        admin = User.objects.create_superuser(email="root@example.com", password=PASSWORD, full_name="Root")
        self.client.force_authenticate(admin)

        resp = self.client.get(self.url)

        self.assertEqual(resp.data["role"], Role.ADMIN)
        self.assertEqual(resp.data["dashboard"]["total_users"], 1)


class CreateAdminCommandTests(TestCase):
    env = {"ADMIN_EMAIL": "Root@Example.com", "ADMIN_PASSWORD": "s3cret-pass"}

    @override_settings(DEBUG=True)
    def test_creates_admin_from_env(self):
        with patch.dict(os.environ, self.env):
            call_command("create_admin", stdout=StringIO(), stderr=StringIO())

        user = User.objects.get(email="root@example.com")
        self.assertEqual(user.role, Role.ADMIN)
        self.assertTrue(user.is_staff)
        self.assertTrue(user.is_superuser)
        self.assertTrue(user.check_password("s3cret-pass"))

    @override_settings(DEBUG=True)
    def test_promotes_existing_user(self):
        make_user(email="root@example.com")
        with patch.dict(os.environ, self.env):
            call_command("create_admin", stdout=StringIO(), stderr=StringIO())

        self.assertEqual(User.objects.get(email="root@example.com").role, Role.ADMIN)

    @override_settings(DEBUG=False)
    def test_refuses_in_production_without_flag(self):
        with patch.dict(os.environ, self.env):
            os.environ.pop("ALLOW_CREATE_ADMIN_IN_PROD", None)
            call_command("create_admin", stdout=StringIO(), stderr=StringIO())

        self.assertFalse(User.objects.filter(email="root@example.com").exists())
