# fau_portal/core/email.py
"""
Outbound email transport using Resend.

Only the transport lives here. Message content is rendered by
fau_portal.services.notifications.
"""
import logging
from typing import Optional

import resend

from fau_portal.core.config import settings

logger = logging.getLogger(__name__)


def init_resend():
    """Initialize Resend with API key."""
    resend.api_key = settings.RESEND_API_KEY


def send_email(
    to_email: str,
    subject: str,
    text: str,
    reply_to: Optional[str] = None,
) -> Optional[dict]:
    """
    Send a plain-text email.

    Returns:
        The Resend API response, or None when no API key is configured
        and the message was skipped.

    Raises:
        Whatever the Resend client raises. Callers decide how to handle it.
    """
    if not settings.email_enabled:
        logger.info("RESEND_API_KEY not configured, skipping email to %s", to_email)
        return None

    init_resend()

    params = {
        "from": settings.EMAIL_FROM,
        "to": [to_email],
        "subject": subject,
        "text": text,
    }
    if reply_to:
        params["reply_to"] = reply_to

    return resend.Emails.send(params)
