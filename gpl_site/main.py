import logging
from pathlib import Path

from litestar import Litestar, Request
from litestar.config.cors import CORSConfig
from litestar.contrib.jinja import JinjaTemplateEngine
from litestar.di import Provide
from litestar.exceptions import HTTPException, NotAuthorizedException
from litestar.plugins.sqlalchemy import SQLAlchemyAsyncConfig, SQLAlchemyInitPlugin
from litestar.response import Redirect, Response
from litestar.status_codes import (
    HTTP_401_UNAUTHORIZED,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)
from litestar.template.config import TemplateConfig

from gpl_site import config as settings
from gpl_site.content import provide_content
from gpl_site.errors import DuplicateRecordError, PersistenceError
from gpl_site.models import Base  # Import models Base for table creation
from gpl_site.routes import ROUTES
from gpl_site.store import provide_store
from gpl_site.submissions import provide_pipeline
from gpl_site.utils import get_base_path, is_api_request
from gpl_site.utils.logging import log_request_error

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger("GPL")

logger.info(f"Starting app in {'DEBUG' if settings.DEBUG else 'PRODUCTION'} mode")
if settings.ENV_FILE:
    logger.info(f"Loaded settings from {settings.ENV_FILE}")
logger.info(f"Database URL: {settings.DATABASE_URL.split('@')[-1]}")

if settings.GOOGLE_CLIENT_ID and settings.GOOGLE_CLIENT_SECRET:
    logger.info("OAuth environment variables are present")
else:
    logger.warning("OAuth environment variables NOT found; admin sign-in is disabled")
if not settings.ADMIN_EMAILS and not settings.SUPER_ADMIN_EMAILS:
    logger.warning("No ADMIN_EMAILS or SUPER_ADMIN_EMAILS configured; nobody can sign in to the admin")

# --- SQLAlchemy config
db_config = SQLAlchemyAsyncConfig(
    connection_string=settings.DATABASE_URL,
    session_dependency_key="session",
    metadata=Base.metadata,
    create_all=settings.DEBUG,  # Auto-create tables on startup (dev only)
)
plugin = SQLAlchemyInitPlugin(db_config)

template_config = TemplateConfig(
    directory=Path(__file__).parent / "templates",
    engine=JinjaTemplateEngine,
)

cors_config = CORSConfig(allow_origins=settings.CORS_ORIGINS, allow_credentials=True)


# --- Exception handlers
def log_exceptions(request: Request, exc: Exception) -> Response:
    log_request_error(request, exc)
    return Response(
        content={"detail": "Internal Server Error"},
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        media_type="application/json"
    )


def handle_http_exception(request: Request, exc: HTTPException) -> Response:
    """Client and framework errors keep their own status code."""
    content = {"status_code": exc.status_code, "detail": exc.detail}
    if exc.extra:
        content["extra"] = exc.extra
    return Response(
        content=content,
        status_code=exc.status_code,
        headers=exc.headers,
        media_type="application/json"
    )


def handle_persistence_error(request: Request, exc: PersistenceError) -> Response:
    log_request_error(request, exc, "Database unavailable")
    if isinstance(exc, DuplicateRecordError):
        return Response(
            content={"detail": "A record with these values already exists"},
            status_code=HTTP_409_CONFLICT,
            media_type="application/json"
        )
    return Response(
        content={"detail": "Service temporarily unavailable"},
        status_code=HTTP_503_SERVICE_UNAVAILABLE,
        media_type="application/json"
    )


def handle_auth_exception(request: Request, exc: NotAuthorizedException) -> Response:
    """JSON 401 for API routes, redirect to the login page for admin pages."""
    if is_api_request(request):
        return Response(
            content={"detail": "Not authorized", "error": exc.detail},
            status_code=HTTP_401_UNAUTHORIZED,
            media_type="application/json"
        )
    return Redirect(f"{get_base_path(request)}/admin/login-page")


# --- App init
app = Litestar(
    route_handlers=ROUTES,
    debug=settings.DEBUG,
    plugins=[plugin],
    template_config=template_config,
    cors_config=cors_config,
    dependencies={
        "store": Provide(provide_store, sync_to_thread=False),
        "pipeline": Provide(provide_pipeline, sync_to_thread=False),
        "content": Provide(provide_content, sync_to_thread=False),
    },
    exception_handlers={
        Exception: log_exceptions,
        HTTPException: handle_http_exception,
        NotAuthorizedException: handle_auth_exception,
        PersistenceError: handle_persistence_error,
    }
)
