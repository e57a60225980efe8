import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from typing import Dict, Optional

from app.api.dependencies import get_contact_service, get_settings
from app.core.config import Settings
from app.core.exceptions import (
    ProviderError,
    SubmissionValidationError,
    TransportError,
)
from app.schemas.contact import ApiError, ApiSuccess, ContactSubmission
from app.services.contact_service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter()

REQUIRED_FIELDS = ("email", "subject", "message")

MISSING_FIELDS_MESSAGE = "Todos los campos son requeridos"
SEND_FAILED_MESSAGE = "Error al enviar el mensaje"


async def read_form_fields(request: Request) -> Dict[str, Optional[str]]:
    """
    Pull the contact fields out of a form-encoded, multipart or JSON body.

    An unreadable body yields no fields, which later fails validation.
    """

    content_type = request.headers.get("content-type", "")

    try:
        if content_type.startswith("application/json"):
            body = await request.json()
            if not isinstance(body, dict):
                return {}
        else:
            body = await request.form()
    except (ValueError, MultiPartException, StarletteHTTPException) as e:
        logger.warning(f"Endpoint: unreadable contact form body: {str(e)}")
        return {}

    fields = {}
    for key in REQUIRED_FIELDS:
        value = body.get(key)
        fields[key] = value if isinstance(value, str) else None
    return fields


def parse_submission(fields: Dict[str, Optional[str]]) -> ContactSubmission:
    if any(not (fields.get(key) or "").strip() for key in REQUIRED_FIELDS):
        raise SubmissionValidationError(MISSING_FIELDS_MESSAGE)

    # the address goes to the provider as typed; it reports bad recipients
    return ContactSubmission(
        email=fields["email"].strip(),
        subject=fields["subject"],
        message=fields["message"],
    )


def error_response(
    status_code: int, message: str, error: Exception, app_settings: Settings
) -> JSONResponse:
    body = ApiError(error=message)
    if not app_settings.is_production:
        body.details = str(error)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(exclude_none=True)
    )


@router.post("/enviar")
@router.post("/send")
async def send_contact_form(
    request: Request,
    contact_service: ContactService = Depends(get_contact_service),
    app_settings: Settings = Depends(get_settings),
):
    """
    Validates a contact form and forwards it by email through the provider.

    <b>Args</b>:
        request (Request): form-encoded, multipart or JSON body with
                           `email`, `subject` and `message`.

    <b>Returns</b>:
        JSONResponse: `{"success": true, "data": ...}` on delivery, otherwise
                      `{"error": ...}` with status 400 or 500.
    """

    try:
        submission = parse_submission(await read_form_fields(request))
    except SubmissionValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ApiError(error=e.message).model_dump(exclude_none=True),
        )

    try:
        data = await run_in_threadpool(
            contact_service.send_contact_message, submission
        )
    except ProviderError as e:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, SEND_FAILED_MESSAGE, e, app_settings
        )
    except TransportError as e:
        logger.error(f"Endpoint: email provider unreachable: {str(e)}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, SEND_FAILED_MESSAGE, e, app_settings
        )
    except Exception as e:
        logger.exception(f"Endpoint: unexpected error sending contact form: {str(e)}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, SEND_FAILED_MESSAGE, e, app_settings
        )

    return ApiSuccess(data=data).model_dump()
