"""Request rate limiting keyed by client address."""
import os

from slowapi import Limiter
from slowapi.util import get_remote_address

from .config.constants import RATE_LIMITS

RATE_LIMIT_ENABLED = os.environ.get("RATE_LIMIT_ENABLED", "true").lower() == "true"

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[RATE_LIMITS["general"]],
    enabled=RATE_LIMIT_ENABLED,
)

GENERAL_LIMIT = RATE_LIMITS["general"]
QUOTE_LIMIT = RATE_LIMITS["quote"]
