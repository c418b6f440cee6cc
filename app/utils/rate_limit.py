"""
Shared request rate limiter.

Limits are keyed on the client address; the limiter can be switched off
with RATE_LIMIT_ENABLED (the test suite does this).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
