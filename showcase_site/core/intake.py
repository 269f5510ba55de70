"""
Contact-form intake validation.

Turns the raw key/value payload posted by the site's forms into a
ContactSubmission. The general contact form posts `name`/`company` while the
partnership form posts `contactName`/`companyName`; both are accepted here.
"""

import re
from typing import Any, Mapping, Optional

from showcase_site.models.contact import ContactSubmission

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

MISSING_FIELDS_MESSAGE = "Name, email, and message are required"
INVALID_EMAIL_MESSAGE = "Invalid email format"


class IntakeError(Exception):
    """Submission rejected before anything was forwarded"""

    message = "Invalid submission"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class MissingFieldError(IntakeError):
    message = MISSING_FIELDS_MESSAGE


class InvalidEmailError(IntakeError):
    message = INVALID_EMAIL_MESSAGE


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, bool):
        return str(value).lower() if value else None
    if isinstance(value, (int, float)):
        return str(value) if value else None
    return str(value) or None


def _first(raw: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = _text(raw.get(key))
        if value:
            return value
    return None


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def normalize_submission(raw: Mapping[str, Any], require_valid_email: bool = True) -> ContactSubmission:
    """
    Validate and normalize a raw contact payload.

    Args:
        raw: Parsed request body (JSON object or form fields)
        require_valid_email: Reject emails that are not shaped like local@domain.tld

    Returns:
        ContactSubmission: The normalized submission

    Raises:
        MissingFieldError: name (or contactName), email or message is empty
        InvalidEmailError: email format check is enabled and fails
    """
    name = _first(raw, "name", "contactName")
    email = _first(raw, "email")
    message = _first(raw, "message")

    if not name or not email or not message:
        raise MissingFieldError()

    if require_valid_email and not is_valid_email(email):
        raise InvalidEmailError()

    return ContactSubmission(
        name=name,
        email=email,
        message=message,
        company=_first(raw, "company", "companyName"),
        phone=_first(raw, "phone"),
        partnership_type=_first(raw, "partnershipType"),
        form_type=_first(raw, "formType"),
    )
