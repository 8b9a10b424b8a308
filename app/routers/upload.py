# app/routers/upload.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from app.config import settings
from app.core.errors import UploadRejected, UploadFailed
from app.core.rate_limit import limiter
from app.schemas.upload import UploadOut, UploadError, PrecheckPayload
from app.services.security import require_user, AuthUser
from app.services.storage import storage
from app.services.metrics import record_upload
from app.services.upload_validate import (
    UploadContext,
    validate_client_side,
    validate_server_side,
    derive_storage_filename,
)

router = APIRouter(prefix="/api/upload", tags=["upload"])
log = logging.getLogger(__name__)

NO_FILE_MESSAGE = "Nebyl vybrán žádný soubor."


# Method: upload_image()
@router.post(
    "",
    response_model=UploadOut,
    responses={400: {"model": UploadError}, 500: {"model": UploadError}},
)
@limiter.limit(settings.UPLOAD_RATE_LIMIT)
async def upload_image(
    request: Request,
    auth: AuthUser = Depends(require_user),
    file: Optional[UploadFile] = File(default=None),
    upload_type: Optional[str] = Form(default=None, alias="type"),
):
    """
    Validate an image and store it under a generated name.

    Nothing is written unless the server-side validation accepts the bytes.
    """
    context = UploadContext.from_value(upload_type)
    if file is None or not file.filename:
        raise UploadRejected("NO_FILE", NO_FILE_MESSAGE)

    try:
        content = await file.read()
    except OSError as exc:
        log.exception("Reading upload from %s failed", auth.user_id)
        record_upload("failed", context=context.value)
        raise UploadFailed() from exc

    outcome = validate_server_side(
        file.filename,
        file.content_type,
        len(content),
        content,
        context,
    )
    if not outcome.is_valid:
        log.info(
            "Upload rejected for %s: %s (%s, %s, %d bytes)",
            auth.user_id,
            outcome.error_code.value,
            file.filename,
            file.content_type,
            len(content),
        )
        record_upload("rejected", code=outcome.error_code.value, context=context.value)
        body = outcome.as_error()
        raise UploadRejected(body["error"], body["message"])

    filename = derive_storage_filename(file.filename, auth.user_id, context)
    try:
        key = storage.save(filename, content)
    except OSError as exc:
        log.exception("Storing upload %s failed", filename)
        record_upload("failed", context=context.value)
        raise UploadFailed() from exc

    record_upload("accepted", context=context.value)
    return UploadOut(
        url=storage.url_for(key),
        filename=filename,
        size=len(content),
        type=file.content_type,
    )


# Method: precheck_upload()
@router.post("/precheck", responses={400: {"model": UploadError}})
@limiter.limit(settings.UPLOAD_RATE_LIMIT)
async def precheck_upload(request: Request, payload: PrecheckPayload):
    """Metadata-only check a browser can run before sending the bytes."""
    outcome = validate_client_side(payload.filename, payload.mime_type, payload.size)
    if not outcome.is_valid:
        body = outcome.as_error()
        raise UploadRejected(body["error"], body["message"])
    return {"valid": True}
