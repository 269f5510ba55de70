#run it with uvicorn showcase_site.main:app --reload  (or the `showcase-site` console script)
from typing import Optional
import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from showcase_site.api.api_router import api_router
from showcase_site.core.config import Settings, get_settings
from showcase_site.core.forwarder import ContactForwarder
from showcase_site.core.middleware import BodySizeLimitMiddleware
from showcase_site.core.providers import MessageProvider, build_provider

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()


def _is_api_path(path: str) -> bool:
    return path == "/api" or path.startswith("/api/")


def create_app(settings: Optional[Settings] = None, provider: Optional[MessageProvider] = None) -> FastAPI:
    """
    Build the website application.

    Args:
        settings: Configuration to use (defaults to the cached environment settings)
        provider: Messaging provider override; built from settings when omitted
    """
    settings = settings or get_settings()
    provider = provider or build_provider(settings)

    logging.getLogger().setLevel(settings.log_level)

    if not provider.is_configured:
        logger.warning(
            f"⚠️  WARNING: {provider.name} credential not set ({settings.mail_provider}). "
            "Contact form will not work."
        )

    app = FastAPI(title=f"{settings.site_name} Website", version="1.0.0")
    app.state.settings = settings
    app.state.forwarder = ContactForwarder(provider, site_name=settings.site_name)

    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"❌ Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Something went wrong!"},
        )

    app.include_router(api_router)

    static_dir = settings.static_dir.resolve()

    # Catch all handler - serve static files, or index.html for any other non-API route
    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_site(full_path: str, request: Request):
        if _is_api_path(request.url.path):
            raise StarletteHTTPException(status_code=404)

        if full_path:
            candidate = (static_dir / full_path).resolve()
            if candidate.is_file() and candidate.is_relative_to(static_dir):
                return FileResponse(candidate)

        index = static_dir / "index.html"
        if not index.is_file():
            logger.error(f"index.html not found in {static_dir}")
            raise StarletteHTTPException(status_code=404)
        return FileResponse(index)

    return app


app = create_app()


def run():
    """Console entrypoint: serve the site on HOST:PORT"""
    settings = get_settings()
    logger.info(f"🚀 {settings.site_name} website running on port {settings.port}")
    if settings.mail_provider == "mailgun":
        logger.info(f"📧 Contact form configured for: {settings.recipient_email}")
        logger.info(f"📬 Using Mailgun domain: {settings.mailgun_domain}")
    else:
        logger.info(f"📬 Using Web3Forms endpoint: {settings.web3forms_endpoint}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
