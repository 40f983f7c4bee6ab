"""Google OAuth sign-in for the admin back-office."""

import logging
import secrets
from typing import NamedTuple, Optional, Union

from authlib.integrations.httpx_client import AsyncOAuth2Client
from litestar import Request
from litestar.connection import ASGIConnection
from litestar.exceptions import NotAuthorizedException, PermissionDeniedException
from litestar.handlers.base import BaseRouteHandler
from litestar.response import Redirect, Response
from litestar.stores.memory import MemoryStore

from gpl_site import config
from gpl_site.utils import get_base_path

logger = logging.getLogger("GPL.auth")

ADMIN_EMAIL_KEY = "admin_email"
ADMIN_ROLE_KEY = "admin_role"
SESSION_COOKIE = "session_id"
SESSION_TTL = 60 * 60 * 24 * 7  # 7 days

ROLE_ADMIN = "admin"
ROLE_SUPER_ADMIN = "super_admin"

# OAuth endpoints
GOOGLE_AUTHORIZATION_BASE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

# Session store (in-memory, one process)
session_store = MemoryStore()


class AdminIdentity(NamedTuple):
    email: str
    role: str


def role_for_email(email: Optional[str]) -> Optional[str]:
    """Role granted to an email by the ADMIN_EMAILS / SUPER_ADMIN_EMAILS allowlists."""
    if not email:
        return None
    email = email.strip().lower()
    if email in config.SUPER_ADMIN_EMAILS:
        return ROLE_SUPER_ADMIN
    if email in config.ADMIN_EMAILS:
        return ROLE_ADMIN
    return None


def _as_text(raw: Union[bytes, str, None]) -> Optional[str]:
    # MemoryStore returns bytes
    if raw is None:
        return None
    if isinstance(raw, bytes):
        return raw.decode("utf-8")
    return str(raw)


def get_redirect_uri(request: Request) -> str:
    """OAuth callback URL for the host the request came in on."""
    scheme = request.url.scheme
    host = request.url.hostname
    port = request.url.port
    base_path = get_base_path(request)
    if port and port != (443 if scheme == "https" else 80):
        return f"{scheme}://{host}:{port}{base_path}/admin/callback"
    return f"{scheme}://{host}{base_path}/admin/callback"


def oauth_client(request: Request) -> AsyncOAuth2Client:
    return AsyncOAuth2Client(
        client_id=config.GOOGLE_CLIENT_ID,
        client_secret=config.GOOGLE_CLIENT_SECRET,
        redirect_uri=get_redirect_uri(request),
    )


async def start_admin_session(session_id: str, email: str, role: str) -> None:
    await session_store.set(f"{ADMIN_EMAIL_KEY}:{session_id}", email, expires_in=SESSION_TTL)
    await session_store.set(f"{ADMIN_ROLE_KEY}:{session_id}", role, expires_in=SESSION_TTL)


async def end_admin_session(session_id: str) -> None:
    await session_store.delete(f"{ADMIN_EMAIL_KEY}:{session_id}")
    await session_store.delete(f"{ADMIN_ROLE_KEY}:{session_id}")


async def admin_login(request: Request) -> Redirect:
    """Initiate Google OAuth login."""
    if not config.GOOGLE_CLIENT_ID or not config.GOOGLE_CLIENT_SECRET:
        logger.error("Google OAuth credentials not configured")
        raise NotAuthorizedException("OAuth not configured")
    
    # State token for CSRF protection
    state = secrets.token_urlsafe(32)
    session_id = request.cookies.get(SESSION_COOKIE) or secrets.token_urlsafe(32)
    await session_store.set(f"oauth_state:{session_id}", state, expires_in=600)
    
    client = oauth_client(request)
    auth_url, _ = client.create_authorization_url(
        GOOGLE_AUTHORIZATION_BASE_URL,
        state=state,
        scope="openid email profile",
    )
    
    response = Redirect(auth_url)
    response.set_cookie(
        SESSION_COOKIE,
        session_id,
        httponly=True,
        secure=request.url.scheme == "https",
        samesite="lax",
        path="/",
    )
    logger.debug(f"Set session_id cookie: {session_id[:8]}... for redirect to Google")
    return response


def _error(message: str, status_code: int) -> Response:
    return Response(content={"error": message}, status_code=status_code, media_type="application/json")


async def admin_callback(request: Request) -> Union[Redirect, Response]:
    """Handle Google OAuth callback."""
    code = request.query_params.get("code")
    state = request.query_params.get("state")
    error = request.query_params.get("error")
    
    if error:
        logger.warning(f"OAuth error: {error}")
        return _error("Authentication failed", 400)
    if not code or not state:
        return _error("Missing code or state", 400)
    
    session_id = request.cookies.get(SESSION_COOKIE)
    if not session_id:
        logger.warning("No session_id cookie found in OAuth callback")
        return _error("No session found", 400)
    
    stored_state = _as_text(await session_store.get(f"oauth_state:{session_id}"))
    if not stored_state:
        logger.warning(f"No stored state found for session_id: {session_id[:8]}...")
        return _error("State token expired or not found", 400)
    if not secrets.compare_digest(stored_state, state):
        logger.warning(f"OAuth state mismatch for session_id: {session_id[:8]}...")
        return _error("Invalid state token", 400)
    
    try:
        async with oauth_client(request) as client:
            token = await client.fetch_token(GOOGLE_TOKEN_URL, code=code)
            access_token = token.get("access_token")
            if not access_token:
                raise ValueError("No access token in response")
            user_info = await client.get(
                GOOGLE_USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            user_data = user_info.json()
    except Exception:
        logger.exception("OAuth token exchange failed")
        return _error("Authentication failed", 500)
    
    email = user_data.get("email")
    role = role_for_email(email)
    if role is None:
        logger.warning(f"Unauthorized email attempt: {email}")
        return _error("Unauthorized email address", 403)
    
    await start_admin_session(session_id, str(email), role)
    await session_store.delete(f"oauth_state:{session_id}")
    logger.info(f"Admin authenticated: {email} ({role})")
    
    return Redirect(f"{get_base_path(request)}/admin")


async def admin_logout(request: Request) -> Redirect:
    """Log out admin user."""
    session_id = request.cookies.get(SESSION_COOKIE)
    if session_id:
        await end_admin_session(session_id)
        logger.info(f"Admin logged out: session_id {session_id[:8]}...")
    
    response = Redirect(f"{get_base_path(request)}/admin/login-page")
    response.delete_cookie(SESSION_COOKIE, path="/")
    return response


async def current_admin(connection: ASGIConnection) -> Optional[AdminIdentity]:
    """Identity behind the session cookie, re-checked against the current allowlists."""
    session_id = connection.cookies.get(SESSION_COOKIE)
    if not session_id:
        return None
    email = _as_text(await session_store.get(f"{ADMIN_EMAIL_KEY}:{session_id}"))
    if not email:
        return None
    # Allowlist may have changed since sign-in
    role = role_for_email(email)
    if role is None:
        logger.warning(f"Session for {email} no longer on the admin allowlist")
        return None
    return AdminIdentity(email=email, role=role)


async def require_admin_guard(connection: ASGIConnection, handler: BaseRouteHandler) -> None:
    """Guard: admin or super_admin session required."""
    identity = await current_admin(connection)
    if identity is None:
        logger.warning(f"Admin access attempted without authentication: {connection.url.path}")
        raise NotAuthorizedException("Not authenticated")
    connection.state.admin = identity
    logger.debug(f"Admin access granted for: {identity.email}")


async def require_super_admin_guard(connection: ASGIConnection, handler: BaseRouteHandler) -> None:
    """Guard: super_admin session required."""
    identity = await current_admin(connection)
    if identity is None:
        raise NotAuthorizedException("Not authenticated")
    if identity.role != ROLE_SUPER_ADMIN:
        logger.warning(f"Super admin action refused for {identity.email}: {connection.url.path}")
        raise PermissionDeniedException("Super admin role required")
    connection.state.admin = identity
