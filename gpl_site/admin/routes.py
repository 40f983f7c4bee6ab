"""Admin page routes."""

from litestar import Request, get
from litestar.response import Redirect, Response, Template

from gpl_site.auth.oauth import admin_callback, admin_login, admin_logout, require_admin_guard
from gpl_site.utils import get_base_path


@get("/admin", guards=[require_admin_guard])
async def admin_dashboard(request: Request) -> Template:
    """Admin dashboard page (requires authentication)."""
    return Template(
        template_name="admin/dashboard.html",
        context={"base_path": get_base_path(request), "admin": request.state.admin},
    )


@get("/admin/login-page")
async def admin_login_page(request: Request) -> Template:
    """Admin login page (shown when not authenticated)."""
    return Template(template_name="admin/login.html", context={"base_path": get_base_path(request)})


@get("/admin/login")
async def admin_login_route(request: Request) -> Redirect:
    """Redirect to Google OAuth login."""
    return await admin_login(request)


@get("/admin/callback")
async def admin_callback_route(request: Request) -> Response:
    """Handle OAuth callback."""
    return await admin_callback(request)


@get("/admin/logout")
async def admin_logout_route(request: Request) -> Redirect:
    """Log out admin user."""
    return await admin_logout(request)


routes = [admin_dashboard, admin_login_page, admin_login_route, admin_callback_route, admin_logout_route]
