import random
import string

from django.utils import timezone

BASE36_ALPHABET = string.digits + string.ascii_uppercase


def generate_order_number(prefix="ORD"):
    """
    Human-readable order number: ORD-<epoch millis>-<9 random base36 chars>.
    """
    millis = int(timezone.now().timestamp() * 1000)
    suffix = "".join(random.choices(BASE36_ALPHABET, k=9))
    return f"{prefix}-{millis}-{suffix}"

def percentage_change(current, previous):
    """
    Percent change from previous to current; 0 when there is no previous value.
    """
    if not previous:
        return 0.0
    return round(float((current - previous) / previous * 100), 2)
