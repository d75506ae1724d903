# fau_portal/services/notifications.py
"""
Notification dispatcher.

Renders the Norwegian or English plain-text emails sent to registrants and
hands them to the Resend transport. Delivery is best-effort: every `send_*`
function logs failures with a traceback and returns False instead of raising,
so a broken mail provider never fails a request or a scheduler tick.

Functions accept anything with the right attributes, either ORM rows or the
pydantic response schemas, so background tasks can run after the request's
database session has closed.
"""

import logging
from datetime import date
from typing import Iterable, Optional, Tuple

from fau_portal.core.config import settings
from fau_portal.core.email import send_email
from fau_portal.core.exceptions import NotificationDeliveryFailure

logger = logging.getLogger(__name__)

KINDERGARTEN_ADDRESS = "Steinråsa 5, 5306 Erdal"

# Rooms in the kindergarten, all at the same street address
KNOWN_LOCATIONS = ("Småbarnsfløyen", "Storbarnsfløyen", "Møterom", "Ute")
OTHER_LOCATIONS = ("Annet", "Other")

_WEEKDAYS = {
    "no": ["mandag", "tirsdag", "onsdag", "torsdag", "fredag", "lørdag", "søndag"],
    "en": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
}
_MONTHS = {
    "no": [
        "januar", "februar", "mars", "april", "mai", "juni",
        "juli", "august", "september", "oktober", "november", "desember",
    ],
    "en": [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
}

TEMPLATES = {
    "no": {
        "greeting": "Hei {name}",
        "thank_you": "Takk for at du har meldt deg på {title}!",
        "date": "Dato:",
        "time": "Tid:",
        "location": "Sted:",
        "slots": "Tidspunkt for fotografering:",
        "cant_come": (
            "Dersom du plutselig ikke har anledning til å delta allikevel håper vi at du "
            "sender oss ett svar på denne eposten hvor du gir beskjed om at du ikke kan "
            "komme allikevel."
        ),
        "signature": "Mvh\nFAU Erdal Barnehage",
        "confirmation_subject": "Påmeldingsbekreftelse: {title}",
        "cancellation_subject": "AVLYST: {title}",
        "cancellation_intro": "Vi må dessverre informere deg om at følgende arrangement er avlyst:",
        "apology": "Vi beklager eventuelle ulemper dette måtte medføre.",
        "questions": "For spørsmål, vennligst kontakt oss på {email}",
        "reminder_subject": "Påminnelse: {title} i morgen",
        "reminder_intro": "Dette er en påminnelse om at du er påmeldt til følgende arrangement i morgen:",
        "attendees": "Antall deltakere:",
        "see_you": "Vi gleder oss til å se deg!",
    },
    "en": {
        "greeting": "Hi {name}",
        "thank_you": "Thank you for registering for {title}!",
        "date": "Date:",
        "time": "Time:",
        "location": "Location:",
        "slots": "Photo time slots:",
        "cant_come": (
            "If you suddenly cannot attend, please reply to this email to let us know "
            "that you cannot come after all."
        ),
        "signature": "Best regards\nFAU Erdal Barnehage",
        "confirmation_subject": "Registration confirmation: {title}",
        "cancellation_subject": "CANCELLED: {title}",
        "cancellation_intro": "We regret to inform you that the following event has been cancelled:",
        "apology": "We apologize for any inconvenience this may cause.",
        "questions": "For questions, please contact us at {email}",
        "reminder_subject": "Reminder: {title} tomorrow",
        "reminder_intro": "This is a reminder that you are registered for the following event tomorrow:",
        "attendees": "Number of attendees:",
        "see_you": "We look forward to seeing you!",
    },
}

CONTACT_SUBJECTS = {
    "general": "Generell Henvendelse",
    "anonymous": "Anonym Henvendelse",
    "events": "Forslag til Arrangement",
    "feedback": "Tilbakemeldinger",
    "join": "Bli med i FAU",
    "other": "Annet",
}


def _template(language: Optional[str]) -> dict:
    return TEMPLATES.get(language or "no", TEMPLATES["no"])


def format_event_date(value: date, language: str = "no") -> str:
    """`fredag 14. mars 2025` or `Friday, March 14, 2025`."""
    language = language if language in _WEEKDAYS else "no"
    weekday = _WEEKDAYS[language][value.weekday()]
    month = _MONTHS[language][value.month - 1]
    if language == "no":
        return f"{weekday} {value.day}. {month} {value.year}"
    return f"{weekday}, {month} {value.day}, {value.year}"


def location_text(event) -> str:
    """Expand kindergarten rooms to their street address."""
    if event.location in OTHER_LOCATIONS and event.custom_location:
        return event.custom_location
    if event.location in KNOWN_LOCATIONS:
        return f"{event.location}: {KINDERGARTEN_ADDRESS}"
    return event.location


def _event_lines(event, t: dict, language: str) -> str:
    lines = [
        event.title,
        f"{t['date']} {format_event_date(event.date, language)}",
        f"{t['time']} {event.time}",
    ]
    if event.location:
        lines.append(f"{t['location']} {location_text(event)}")
    return "\n".join(lines) + "\n"


# ===========================================
# Rendering
# ===========================================


def render_confirmation(event, registration) -> Tuple[str, str]:
    language = registration.language or "no"
    t = _template(language)
    body = f"{t['greeting'].format(name=registration.name)}\n\n"
    body += f"{t['thank_you'].format(title=event.title)}\n\n"
    body += _event_lines(event, t, language)
    if registration.time_slots:
        children = registration.children_names or []
        body += f"\n{t['slots']}\n"
        for index, slot in enumerate(registration.time_slots):
            child = children[index] if index < len(children) else ""
            body += f"  {slot} {child}".rstrip() + "\n"
    if event.description:
        body += f"\n{event.description}\n"
    body += f"\n{t['cant_come']}\n\n{t['signature']}"
    return t["confirmation_subject"].format(title=event.title), body


def render_cancellation(event, registration) -> Tuple[str, str]:
    language = registration.language or "no"
    t = _template(language)
    body = f"{t['greeting'].format(name=registration.name)}!\n\n"
    body += f"{t['cancellation_intro']}\n\n"
    body += _event_lines(event, t, language)
    body += f"\n{t['apology']}\n\n"
    body += f"{t['questions'].format(email=settings.COUNCIL_EMAIL)}\n\n"
    body += t["signature"]
    return t["cancellation_subject"].format(title=event.title), body


def render_reminder(event, registration) -> Tuple[str, str]:
    language = registration.language or "no"
    t = _template(language)
    body = f"{t['greeting'].format(name=registration.name)},\n\n"
    body += f"{t['reminder_intro']}\n\n"
    body += _event_lines(event, t, language)
    body += f"{t['attendees']} {registration.attendee_count}\n"
    if registration.time_slots:
        body += f"{t['slots']} {', '.join(registration.time_slots)}\n"
    body += f"\n{t['see_you']}\n\n{t['cant_come']}\n\n{t['signature']}"
    return t["reminder_subject"].format(title=event.title), body


def render_contact(message) -> Tuple[str, str]:
    subject_text = CONTACT_SUBJECTS.get(message.subject, message.subject)
    body = "Ny henvendelse fra FAU Erdal Barnehage kontaktskjema\n\n"
    body += f"Emne: {subject_text}\n\n"
    if not message.email:
        body += "ANONYM HENVENDELSE - Ingen kontaktinformasjon tilgjengelig\n\n"
    else:
        body += "Kontaktinformasjon:\n"
        body += f"Navn: {message.name}\n"
        body += f"E-post: {message.email}\n"
        if message.phone:
            body += f"Telefon: {message.phone}\n"
        body += "\n"
    body += f"Melding:\n{message.message}\n\n"
    body += "---\nSendt fra FAU Erdal Barnehage nettside"
    return f"FAU Kontakt: {subject_text}", body


# ===========================================
# Dispatch
# ===========================================


def _deliver(kind: str, to_email: str, subject: str, text: str, reply_to: Optional[str]) -> bool:
    try:
        response = send_email(to_email, subject, text, reply_to=reply_to)
    except Exception as exc:
        failure = NotificationDeliveryFailure(to_email, str(exc))
        logger.error("%s email failed: %s", kind, failure.message, exc_info=True)
        return False
    if response is None:
        return False
    logger.info("%s email sent to %s", kind, to_email)
    return True


def send_confirmation(event, registration) -> bool:
    subject, text = render_confirmation(event, registration)
    return _deliver("Confirmation", registration.email, subject, text, settings.COUNCIL_EMAIL)


def send_cancellation(event, registration) -> bool:
    subject, text = render_cancellation(event, registration)
    return _deliver("Cancellation", registration.email, subject, text, settings.COUNCIL_EMAIL)


def send_reminder(event, registration) -> bool:
    subject, text = render_reminder(event, registration)
    return _deliver("Reminder", registration.email, subject, text, settings.COUNCIL_EMAIL)


def send_cancellations(event, registrations: Iterable) -> Tuple[int, int]:
    """
    Tell every registrant that `event` is cancelled.

    Each send is independent; one failure never blocks the rest.

    Returns:
        (sent, failed) counts.
    """
    sent = failed = 0
    for registration in registrations:
        if send_cancellation(event, registration):
            sent += 1
        else:
            failed += 1
    logger.info(
        "Cancellation notices for event %s: %d sent, %d failed", event.id, sent, failed
    )
    return sent, failed


def send_contact_notification(message) -> bool:
    """Forward a contact-form submission to the council mailbox."""
    subject, text = render_contact(message)
    return _deliver("Contact", settings.COUNCIL_EMAIL, subject, text, message.email)
