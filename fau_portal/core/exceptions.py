# fau_portal/core/exceptions.py
"""
Domain exception hierarchy for the FAU portal.

Every error carries a stable, parseable message: the web client matches on
substrings such as "already registered", "capacity" or "cancelled".
All exceptions inherit from PortalError for consistent handling.
"""

from typing import Optional


class PortalError(Exception):
    """Base exception for all portal errors."""

    status_code: int = 500
    error_code: str = "PORTAL_ERROR"

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(PortalError):
    """Missing or insecure configuration. Fatal at startup."""

    error_code = "CONFIGURATION_ERROR"


# ===========================================
# Authentication / authorization
# ===========================================


class InvalidCredentials(PortalError):
    status_code = 401
    error_code = "INVALID_CREDENTIALS"

    def __init__(self):
        super().__init__("Invalid username or password")


class Unauthorized(PortalError):
    status_code = 401
    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class Forbidden(PortalError):
    status_code = 403
    error_code = "FORBIDDEN"

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)


# ===========================================
# Events and registrations
# ===========================================


class NotFound(PortalError):
    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id):
        super().__init__(
            f"{resource} not found",
            details={"resource": resource.lower(), "id": resource_id},
        )


class EventCancelled(PortalError):
    status_code = 400
    error_code = "EVENT_CANCELLED"

    def __init__(self, event_id: str):
        super().__init__(
            "Cannot register for cancelled event", details={"eventId": event_id}
        )


class DuplicateRegistration(PortalError):
    status_code = 400
    error_code = "DUPLICATE_REGISTRATION"

    def __init__(self, event_id: str):
        super().__init__(
            "This email is already registered for this event",
            details={"eventId": event_id},
        )


class CapacityExceeded(PortalError):
    status_code = 400
    error_code = "CAPACITY_EXCEEDED"

    def __init__(self, available: int):
        self.available = max(0, available)
        super().__init__(
            "Event is at capacity", details={"available": self.available}
        )


class Conflict(PortalError):
    """Hard delete refused because registrations still reference the event."""

    status_code = 400
    error_code = "CONFLICT"

    def __init__(self, message: str):
        super().__init__(message, details={"hasRegistrations": True})


class AlreadyExists(PortalError):
    status_code = 409
    error_code = "ALREADY_EXISTS"

    def __init__(self, resource: str, key: str):
        super().__init__(
            f"{resource} already exists",
            details={"resource": resource.lower(), "key": key},
        )


class InvalidRegistration(PortalError):
    status_code = 400
    error_code = "INVALID_REGISTRATION"


class InvalidEventUpdate(PortalError):
    status_code = 400
    error_code = "INVALID_EVENT_UPDATE"


class BlockedEmailDomain(PortalError):
    """The email domain is a known placeholder or otherwise undeliverable."""

    status_code = 400
    error_code = "EMAIL_DOMAIN_BLOCKED"

    MESSAGES = {
        "no": "Ugyldig e-postadresse. Bruk en ekte e-post.",
        "en": "Invalid email address. Please use a real email.",
    }

    def __init__(self, category: str, language: str = "no"):
        super().__init__(
            self.MESSAGES.get(language, self.MESSAGES["no"]),
            details={"category": category},
        )


class SuggestedEmailDomain(PortalError):
    """The email domain looks like a provider typo; carries the likely fix."""

    status_code = 400
    error_code = "EMAIL_DOMAIN_SUGGESTION"

    MESSAGES = {
        "no": 'Mente du "{suggestion}"?',
        "en": 'Did you mean "{suggestion}"?',
    }

    def __init__(self, suggestion: str, category: str, language: str = "no"):
        self.suggestion = suggestion
        template = self.MESSAGES.get(language, self.MESSAGES["no"])
        super().__init__(
            template.format(suggestion=suggestion),
            details={"suggestion": suggestion, "category": category},
        )


# ===========================================
# Notifications
# ===========================================


class NotificationDeliveryFailure(PortalError):
    """Raised inside the dispatcher only; always caught and logged there."""

    error_code = "NOTIFICATION_DELIVERY_FAILURE"

    def __init__(self, recipient: str, reason: str):
        self.recipient = recipient
        super().__init__(
            f"Failed to deliver email to {recipient}: {reason}",
            details={"recipient": recipient},
        )
