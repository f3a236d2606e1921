"""Contact form submission models and validation outcomes."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, Field

# Untyped bag of fields exactly as decoded from the request body
RawSubmission = dict[str, Any]

DEFAULT_SUBJECT = "No subject"

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100
SUBJECT_MAX_LENGTH = 200
MESSAGE_MAX_LENGTH = 5000


class CleanSubmission(BaseModel):
    """A sanitized submission, safe to embed in Markdown."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LENGTH)
    subject: str = Field(DEFAULT_SUBJECT, min_length=1, max_length=SUBJECT_MAX_LENGTH)
    message: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH)


class Rejection(Enum):
    """Caller-visible failures with their HTTP status and generic message."""

    METHOD_NOT_ALLOWED = (405, "Method not allowed")
    PAYLOAD_TOO_LARGE = (413, "Payload too large")
    MISSING_FIELDS = (400, "Missing required fields")
    INVALID_EMAIL = (400, "Invalid email format")
    INVALID_INPUT = (400, "Invalid input")
    FORWARDING_FAILED = (500, "Failed to submit")
    INTERNAL_ERROR = (500, "Server error")

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message


@dataclass(frozen=True)
class Accepted:
    submission: CleanSubmission


@dataclass(frozen=True)
class Rejected:
    reason: Rejection

    @property
    def status_code(self) -> int:
        return self.reason.status_code


@dataclass(frozen=True)
class Discarded:
    """Submission flagged as automated: reported as success, never forwarded."""

    reason: str = "honeypot"


ValidationOutcome = Union[Accepted, Rejected, Discarded]


class IssuePayload(BaseModel):
    """JSON body of the outbound create-issue call."""

    title: str
    body: str
    labels: list[str] = []


@dataclass
class ForwardResult:
    """Outcome of a single create-issue call."""

    ok: bool
    status_code: int
    issue_number: int | None = None
    issue_url: str | None = None
