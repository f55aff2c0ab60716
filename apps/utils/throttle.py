from rest_framework.throttling import AnonRateThrottle, UserRateThrottle


class AuthRateThrottle(AnonRateThrottle):
    """
    Strict throttling for login and registration attempts (per IP).
    """
    scope = "auth"


class SustainedRateThrottle(UserRateThrottle):
    """
    General API usage.
    """
    scope = "user"
