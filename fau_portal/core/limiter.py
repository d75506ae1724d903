# fau_portal/core/limiter.py
"""
Rate limiter configuration module.
Separated to avoid circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from fau_portal.core.config import settings

# Rate limiter configuration - uses IP address as key
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

LOGIN_LIMIT = "10/minute"
REGISTRATION_LIMIT = "20/minute"
CONTACT_LIMIT = "5/minute"
