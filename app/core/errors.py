from fastapi import Request
from fastapi.responses import JSONResponse


class UploadRejected(Exception):
    """Upload refused before anything was stored; rendered as a 400."""

    def __init__(self, error: str, message: str, status_code: int = 400):
        super().__init__(message)
        self.error = error
        self.message = message
        self.status_code = status_code


class UploadFailed(Exception):
    """Unexpected fault while reading or storing an accepted upload."""

    def __init__(self, message: str = "Nahrávání se nezdařilo. Zkuste to prosím znovu."):
        super().__init__(message)
        self.message = message


async def upload_rejected_handler(request: Request, exc: UploadRejected):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": exc.message},
    )


async def upload_failed_handler(request: Request, exc: UploadFailed):
    return JSONResponse(
        status_code=500,
        content={"error": "UPLOAD_FAILED", "message": exc.message},
    )
