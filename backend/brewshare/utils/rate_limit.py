"""Rate limiting utilities"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config import settings

# Keyed by client address; login runs before any identity exists
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED
)
