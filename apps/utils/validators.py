import re

from rest_framework import serializers


def validate_phone(value):
    pattern = r"^\+?[\d\s\-()]{7,20}$"
    if not re.match(pattern, str(value)):
        raise serializers.ValidationError("Invalid phone number format.")
    return value


def validate_rating(value):
    if not (1 <= int(value) <= 5):
        raise serializers.ValidationError("Rating must be between 1 and 5.")
    return value
