import hmac
from enum import Enum

API_KEY_HEADER = "X-API-Key"


class AccessDecision(str, Enum):
    ALLOWED = "allowed"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


def check_api_key(supplied: str | None, secret: str | None) -> AccessDecision:
    """
    Compare the key a caller sent against the configured shared secret.

    - no key sent -> UNAUTHENTICATED
    - key sent but wrong, or no secret configured -> FORBIDDEN
    - otherwise ALLOWED
    """
    if not supplied:
        return AccessDecision.UNAUTHENTICATED
    if not secret or not hmac.compare_digest(supplied.encode(), secret.encode()):
        return AccessDecision.FORBIDDEN
    return AccessDecision.ALLOWED
