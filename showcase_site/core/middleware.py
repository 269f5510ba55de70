import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

PAYLOAD_TOO_LARGE_MESSAGE = "Request entity too large"


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Rejects requests whose declared Content-Length exceeds max_bytes"""

    def __init__(self, app, max_bytes: int):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                return JSONResponse(
                    status_code=400,
                    content={"success": False, "message": "Invalid Content-Length header"},
                )
            if declared > self.max_bytes:
                logger.warning(
                    f"⚠️ Rejected {request.method} {request.url.path}: body of {declared} bytes exceeds {self.max_bytes}"
                )
                return JSONResponse(
                    status_code=413,
                    content={"success": False, "message": PAYLOAD_TOO_LARGE_MESSAGE},
                )
        return await call_next(request)
