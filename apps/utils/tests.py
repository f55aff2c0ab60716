# apps/utils/tests.py
import json
import logging
import re
from decimal import Decimal

from django.test import SimpleTestCase, TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.test import APITestCase

from .exceptions import BusinessLogicException, custom_exception_handler
from .logging import JSONFormatter
from .utils import generate_order_number, percentage_change
from .validators import validate_phone, validate_rating


class ValidatorTests(SimpleTestCase):
    def test_phone_validator(self):
        self.assertEqual(validate_phone("+1 (555) 010-0199"), "+1 (555) 010-0199")
        with self.assertRaises(ValidationError):
            validate_phone("123")  # Invalid

    def test_rating_validator(self):
        self.assertEqual(validate_rating(5), 5)
        with self.assertRaises(ValidationError):
            validate_rating(0)
        with self.assertRaises(ValidationError):
            validate_rating(6)


class OrderNumberTests(SimpleTestCase):
    def test_format(self):
        number = generate_order_number()
        self.assertRegex(number, r"^ORD-\d{13}-[0-9A-Z]{9}$")

    def test_numbers_differ(self):
        self.assertNotEqual(generate_order_number(), generate_order_number())


class PercentageChangeTests(SimpleTestCase):
    def test_zero_previous_is_zero(self):
        self.assertEqual(percentage_change(Decimal("150.00"), Decimal("0")), 0.0)
        self.assertEqual(percentage_change(3, 0), 0.0)

    def test_growth_and_drop(self):
        self.assertEqual(percentage_change(Decimal("150"), Decimal("100")), 50.0)
        self.assertEqual(percentage_change(1, 4), -75.0)


class ExceptionHandlerTests(SimpleTestCase):
    def test_business_error_shape(self):
        response = custom_exception_handler(
            BusinessLogicException("Your cart is empty.", code="empty_cart"), {}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {"error": "Your cart is empty.", "code": "empty_cart"})

    def test_custom_status_code(self):
        response = custom_exception_handler(
            BusinessLogicException("Duplicate", code="duplicate", status_code=409), {}
        )
        self.assertEqual(response.status_code, 409)

    def test_unhandled_error_becomes_500(self):
        with self.assertLogs("apps.utils.exceptions", level="ERROR"):
            response = custom_exception_handler(RuntimeError("boom"), {"view": None})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["code"], "server_error")


class JSONFormatterTests(SimpleTestCase):
    def _record(self, msg, args=None, **extra):
        record = logging.LogRecord("apps.test", logging.INFO, __file__, 1, msg, args, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_scrubs_nested_sensitive_keys(self):
        payload = {"email": "a@b.com", "password": "hunter2", "nested": [{"token": "abc"}]}
        out = json.loads(JSONFormatter().format(self._record(payload)))

        self.assertNotIn("hunter2", out["msg"])
        self.assertNotIn("abc", out["msg"])
        self.assertIn("a@b.com", out["msg"])

    def test_includes_trace_extras(self):
        out = json.loads(JSONFormatter().format(self._record("placed", order_id="o-1", user_id="u-1")))
        self.assertEqual(out["order_id"], "o-1")
        self.assertEqual(out["user_id"], "u-1")
        self.assertEqual(out["lvl"], "INFO")


class HealthCheckTests(TestCase):
    def test_health_ok(self):
        response = self.client.get(reverse("health-check"))
        self.assertEqual(response.status_code, 200)


class GlobalConfigTests(APITestCase):
    def test_exposes_checkout_rates(self):
        response = self.client.get(reverse("global-config"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["currency"], "USD")
        self.assertTrue(re.match(r"^0\.08", str(response.data["tax_rate"])))
