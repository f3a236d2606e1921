"""Contact request pipeline: method check, validation, forwarding, response mapping.

Transport-neutral: both the FastAPI router and the Azure Functions entry
point hand the request method and a body reader to ``handle_contact_request``
and translate the returned ``ContactReply`` into their own response type.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from api.config import Settings
from api.models.contact import (
    Discarded,
    Rejected,
    Rejection,
)
from api.services.contact_validation import validate_submission
from api.services.issue_forwarder import IssueForwarder

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
TEXT_MEDIA_TYPE = "text/plain"

SUCCESS_BODY: dict[str, Any] = {"success": True}


@dataclass
class ContactReply:
    """Response to send back to the caller."""

    status_code: int
    body: dict[str, Any] | str = field(default_factory=dict)
    media_type: str = JSON_MEDIA_TYPE

    def render(self) -> str:
        if isinstance(self.body, str):
            return self.body
        return json.dumps(self.body)


def success_reply() -> ContactReply:
    return ContactReply(status_code=200, body=dict(SUCCESS_BODY))


def rejection_reply(reason: Rejection) -> ContactReply:
    """Map a rejection to its response. 405 is plain text, the rest JSON."""
    if reason is Rejection.METHOD_NOT_ALLOWED:
        return ContactReply(
            status_code=reason.status_code,
            body=reason.message,
            media_type=TEXT_MEDIA_TYPE,
        )
    return ContactReply(status_code=reason.status_code, body={"error": reason.message})


def decode_submission(raw_body: bytes | str) -> Any:
    """Decode a JSON request body.

    An empty body decodes to an empty submission. A body that is not valid
    JSON is kept as its text so the size ceiling still measures it; the
    validator treats any non-object value as a submission without fields.
    """
    if not raw_body:
        return {}
    try:
        return json.loads(raw_body)
    except (ValueError, RecursionError):
        logger.info("Contact body is not valid JSON")
    if isinstance(raw_body, bytes):
        return raw_body.decode("utf-8", errors="replace")
    return raw_body


async def submit_contact(
    raw: Any, forwarder: IssueForwarder, settings: Settings
) -> ContactReply:
    """Validate a decoded submission and forward it if accepted."""
    outcome = validate_submission(raw, settings.max_payload_size)

    if isinstance(outcome, Rejected):
        logger.info(
            "Contact submission rejected: %s (%d)",
            outcome.reason.name,
            outcome.status_code,
        )
        return rejection_reply(outcome.reason)

    if isinstance(outcome, Discarded):
        logger.warning("Honeypot triggered, submission discarded")
        return success_reply()

    result = await forwarder.forward(outcome.submission)
    if not result.ok:
        return rejection_reply(Rejection.FORWARDING_FAILED)
    return success_reply()


async def handle_contact_request(
    method: str,
    read_body: Callable[[], Awaitable[bytes | str]],
    forwarder_factory: Callable[[], IssueForwarder],
    settings_factory: Callable[[], Settings],
) -> ContactReply:
    """Handle one contact form request end to end.

    This is the outermost error boundary: any exception raised while
    reading the body, resolving settings, decoding, validating or
    forwarding is logged and answered with a generic server error.
    """
    if method.upper() != "POST":
        return rejection_reply(Rejection.METHOD_NOT_ALLOWED)

    try:
        settings = settings_factory()
        raw = decode_submission(await read_body())
        return await submit_contact(raw, forwarder_factory(), settings)
    except Exception:
        logger.exception("Contact request failed")
        return rejection_reply(Rejection.INTERNAL_ERROR)
