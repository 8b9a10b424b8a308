# app/routers/files.py

import logging

from fastapi import APIRouter
from fastapi.responses import FileResponse, JSONResponse

from app.services.storage import storage, content_type_for, PathTraversalError

router = APIRouter(tags=["files"])
log = logging.getLogger(__name__)

CACHE_CONTROL = "public, max-age=31536000, immutable"


# Method: serve_upload()
@router.get("/uploads/{path:path}")
async def serve_upload(path: str):
    try:
        file_path = storage.resolve(path)
    except PathTraversalError:
        log.warning("Blocked path traversal attempt: %r", path)
        return JSONResponse(status_code=403, content={"error": "Access denied"})

    if not file_path.is_file():
        return JSONResponse(status_code=404, content={"error": "File not found"})

    return FileResponse(
        file_path,
        media_type=content_type_for(file_path.name),
        headers={"Cache-Control": CACHE_CONTROL},
    )
