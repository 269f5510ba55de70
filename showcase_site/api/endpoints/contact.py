"""
Contact form endpoint.

Accepts submissions from both site forms (general contact and partnership)
as JSON or form-encoded bodies and relays them through the ContactForwarder.
Provider errors are logged server-side only; callers always get one of the
fixed messages below.
"""

import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from showcase_site.core.config import Settings
from showcase_site.core.forwarder import ContactForwarder
from showcase_site.core.intake import IntakeError, normalize_submission
from showcase_site.core.middleware import PAYLOAD_TOO_LARGE_MESSAGE
from showcase_site.models.contact import ContactResponse, DeliveryStatus

router = APIRouter()
logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Message sent successfully!"
FAILURE_MESSAGE = "Failed to send message. Please try again."
UNCONFIGURED_MESSAGE = "Email service is not configured. Please try again later."

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class PayloadTooLarge(Exception):
    pass


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_forwarder(request: Request) -> ContactForwarder:
    return request.app.state.forwarder


def _reply(status_code: int, success: bool, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ContactResponse(success=success, message=message).model_dump(),
    )


async def _read_body(request: Request, max_bytes: int) -> bytes:
    """Read the request body, stopping as soon as it grows past max_bytes"""
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise PayloadTooLarge()
    return bytes(body)


def _replay(body: bytes):
    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}
    return receive


async def read_payload(request: Request, max_bytes: int) -> Dict[str, Any]:
    """Parse a JSON or form body into a flat dict. Unparsable bodies yield an empty dict."""
    body = await _read_body(request, max_bytes)

    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        buffered = Request(request.scope, receive=_replay(body))
        try:
            form = await buffered.form(max_part_size=max_bytes)
        except StarletteHTTPException as e:
            logger.warning(f"Contact form body could not be parsed: {e.detail}")
            return {}
        # Uploaded files are not part of a contact submission
        return {key: value for key, value in form.items() if isinstance(value, str)}

    # Like express.json(), only application/json bodies are parsed
    if not body or not content_type.startswith("application/json"):
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        logger.warning("Contact request body is not valid JSON")
        return {}
    return data if isinstance(data, dict) else {}


@router.post("/contact", response_model=ContactResponse)
async def submit_contact(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    forwarder: ContactForwarder = Depends(get_forwarder),
):
    try:
        payload = await read_payload(request, settings.max_body_bytes)
    except PayloadTooLarge:
        return _reply(413, False, PAYLOAD_TOO_LARGE_MESSAGE)

    try:
        submission = normalize_submission(payload, require_valid_email=settings.require_valid_email)
    except IntakeError as e:
        logger.info(f"Rejected contact submission: {e.message}")
        return _reply(400, False, e.message)

    logger.info(
        f"📨 Contact submission received: name={submission.name}, email={submission.email}, "
        f"form_type={submission.form_type or 'general'}"
    )

    result = await forwarder.forward(submission)

    if result.success:
        return _reply(200, True, SUCCESS_MESSAGE)
    if result.status == DeliveryStatus.UNCONFIGURED:
        return _reply(500, False, UNCONFIGURED_MESSAGE)
    return _reply(500, False, FAILURE_MESSAGE)
