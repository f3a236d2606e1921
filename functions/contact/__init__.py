"""Azure Functions HTTP trigger for the contact form.

Same pipeline as the FastAPI ``/api/contact`` route, deployed as a
serverless function next to the static site. Settings come from the
function app's application settings (``GITHUB_REPO``, ``GITHUB_TOKEN``, ...).
"""

import logging

import azure.functions as func

from api.config import get_settings
from api.services.contact import handle_contact_request
from api.services.issue_forwarder import get_forwarder

logger = logging.getLogger(__name__)


async def main(req: func.HttpRequest) -> func.HttpResponse:
    logger.info("Contact form triggered (%s)", req.method)

    async def read_body() -> bytes:
        return req.get_body()

    reply = await handle_contact_request(
        req.method, read_body, get_forwarder, get_settings
    )
    return func.HttpResponse(
        reply.render(),
        status_code=reply.status_code,
        mimetype=reply.media_type,
    )
