# apps/analytics/serializers.py
from rest_framework import serializers

from .services import TIME_RANGE_DAYS


class TimeRangeSerializer(serializers.Serializer):
    range = serializers.ChoiceField(choices=list(TIME_RANGE_DAYS), default="30d")
