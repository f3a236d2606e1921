"""GitHub issue creation for accepted contact submissions."""

import logging
from datetime import datetime, timezone

import httpx

from api.config import Settings, get_settings
from api.models.contact import (
    DEFAULT_SUBJECT,
    CleanSubmission,
    ForwardResult,
    IssuePayload,
)
from api.services.http_client import get_shared_client, github_headers

logger = logging.getLogger(__name__)

ISSUE_BODY_TEMPLATE = """## New Contact Form Submission

**From:** {name}
**Email:** {email}
**Subject:** {subject}

---

### Message

{message}

---

*Submitted via {site_name} contact form at {submitted_at}*"""

# Upper bound on how much of the target's error body we log
_ERROR_LOG_LIMIT = 2000


def _isoformat(ts: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    ts = ts.astimezone(timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


def issue_title(submission: CleanSubmission, prefix: str = "") -> str:
    if submission.subject != DEFAULT_SUBJECT:
        title = submission.subject
    else:
        title = f"New message from {submission.name}"
    return f"{prefix}{title}"


def build_issue_payload(
    submission: CleanSubmission,
    settings: Settings,
    submitted_at: datetime | None = None,
) -> IssuePayload:
    """Project a clean submission into the issue title, body and labels."""
    submitted_at = submitted_at or datetime.now(timezone.utc)
    body = ISSUE_BODY_TEMPLATE.format(
        name=submission.name,
        email=submission.email,
        subject=submission.subject,
        message=submission.message,
        site_name=settings.site_name,
        submitted_at=_isoformat(submitted_at),
    )
    return IssuePayload(
        title=issue_title(submission, settings.issue_title_prefix),
        body=body,
        labels=[settings.issue_label],
    )


class IssueForwarder:
    """Creates one GitHub issue per accepted submission.

    Configuration is passed in explicitly so the forwarder can be
    exercised with fake settings and a mock transport. No retries:
    a rejected call is logged and reported once; transport exceptions
    propagate to the caller.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient) -> None:
        self._settings = settings
        self._client = client

    @property
    def issues_url(self) -> str:
        base = self._settings.github_api_url.rstrip("/")
        return f"{base}/repos/{self._settings.github_repo}/issues"

    async def forward(self, submission: CleanSubmission) -> ForwardResult:
        payload = build_issue_payload(submission, self._settings)
        resp = await self._client.post(
            self.issues_url,
            headers=github_headers(
                self._settings.github_token, self._settings.user_agent
            ),
            json=payload.model_dump(),
        )

        if not resp.is_success:
            logger.error(
                "GitHub API error %d creating issue in %s: %s",
                resp.status_code,
                self._settings.github_repo,
                resp.text[:_ERROR_LOG_LIMIT],
            )
            return ForwardResult(ok=False, status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError:
            # Issue was created; only the response details are unavailable
            data = {}
        if not isinstance(data, dict):
            data = {}
        logger.info(
            "Created issue #%s in %s: %s",
            data.get("number"),
            self._settings.github_repo,
            payload.title[:50],
        )
        return ForwardResult(
            ok=True,
            status_code=resp.status_code,
            issue_number=data.get("number"),
            issue_url=data.get("html_url"),
        )


def get_forwarder() -> IssueForwarder:
    """Build a forwarder from process settings and the shared HTTP client."""
    return IssueForwarder(get_settings(), get_shared_client())
