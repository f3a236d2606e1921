"""Contact form endpoint: validates, sanitizes and files submissions as GitHub issues."""

from fastapi import APIRouter, Request
from fastapi.responses import Response

from api.config import get_settings
from api.services.contact import handle_contact_request
from api.services.issue_forwarder import get_forwarder

router = APIRouter(prefix="/contact", tags=["contact"])

# Every method is routed here so non-POST requests get the plain-text 405
_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("", methods=_ALL_METHODS)
async def submit_contact(request: Request) -> Response:
    """Submit the contact form. Accepted submissions become GitHub issues."""
    reply = await handle_contact_request(
        request.method, request.body, get_forwarder, get_settings
    )
    return Response(
        content=reply.render(),
        status_code=reply.status_code,
        media_type=reply.media_type,
    )
