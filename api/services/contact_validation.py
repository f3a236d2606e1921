"""Contact submission validation and Markdown sanitization.

Everything here is pure: a raw submission goes in, a ``ValidationOutcome``
comes out. Sanitized text is embedded verbatim into a GitHub issue body, so
characters that carry Markdown/HTML structure are stripped before the
submission can be accepted.
"""

import json
import re
from typing import Any

from api.models.contact import (
    DEFAULT_SUBJECT,
    EMAIL_MAX_LENGTH,
    MESSAGE_MAX_LENGTH,
    NAME_MAX_LENGTH,
    SUBJECT_MAX_LENGTH,
    Accepted,
    CleanSubmission,
    Discarded,
    Rejected,
    Rejection,
    ValidationOutcome,
)

DEFAULT_MAX_PAYLOAD_SIZE = 50_000

# Markdown/HTML structural characters (GitHub-flavoured Markdown dialect)
_MARKUP_CHARS = re.compile(r"[\[\]()#*`_~<>\\]")
_NEWLINES = re.compile(r"\r\n|\r|\n")
_EMAIL_SHAPE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

REQUIRED_FIELDS = ("name", "email", "message")


def _as_text(value: Any) -> str:
    if not value:
        return ""
    return value if isinstance(value, str) else str(value)


def sanitize_line(value: Any, max_length: int = 500) -> str:
    """Sanitize a single-line field.

    Truncates to ``max_length``, strips markup characters, collapses
    newlines to spaces and trims. Applying it twice is a no-op.
    """
    text = _as_text(value)[:max_length]
    text = _MARKUP_CHARS.sub("", text)
    text = _NEWLINES.sub(" ", text)
    return text.strip()


def sanitize_message(value: Any, max_length: int = MESSAGE_MAX_LENGTH) -> str:
    """Sanitize the message body, keeping newlines for paragraph structure."""
    text = _as_text(value)[:max_length]
    return _MARKUP_CHARS.sub("", text).strip()


def is_valid_email(value: Any) -> bool:
    """Basic ``local@domain.tld`` shape check (not deliverability)."""
    return bool(_EMAIL_SHAPE.fullmatch(_as_text(value)))


def payload_size(raw: Any) -> int:
    """Length of the compact JSON serialization of the raw submission."""
    return len(json.dumps(raw, separators=(",", ":"), ensure_ascii=False))


def validate_submission(
    raw: Any, max_payload_size: int = DEFAULT_MAX_PAYLOAD_SIZE
) -> ValidationOutcome:
    """Turn a raw submission into Accepted, Rejected or Discarded.

    Checks run in a fixed order and stop at the first failure:
    size, required fields, email shape, honeypot, then sanitization
    followed by a re-check that nothing required was stripped to empty.
    """
    if payload_size(raw) > max_payload_size:
        return Rejected(Rejection.PAYLOAD_TOO_LARGE)

    # Anything but a JSON object carries no fields
    if not isinstance(raw, dict):
        raw = {}

    if not all(raw.get(field) for field in REQUIRED_FIELDS):
        return Rejected(Rejection.MISSING_FIELDS)

    if not is_valid_email(raw.get("email")):
        return Rejected(Rejection.INVALID_EMAIL)

    # Honeypot: hidden field only bots fill in
    if raw.get("website"):
        return Discarded()

    name = sanitize_line(raw.get("name"), NAME_MAX_LENGTH)
    email = sanitize_line(raw.get("email"), EMAIL_MAX_LENGTH)
    subject = sanitize_line(raw.get("subject"), SUBJECT_MAX_LENGTH) or DEFAULT_SUBJECT
    message = sanitize_message(raw.get("message"), MESSAGE_MAX_LENGTH)

    if not (name and email and message):
        return Rejected(Rejection.INVALID_INPUT)

    return Accepted(
        CleanSubmission(name=name, email=email, subject=subject, message=message)
    )
