from pathlib import Path

from litestar.static_files import create_static_files_router

from gpl_site.admin.routes import routes as routes_admin
from gpl_site.api import AdminController, ContentController, SubmissionsController, health_routes
from gpl_site.pages.routes import routes as routes_pages

ROUTES = [
    *routes_pages,
    *routes_admin,
    *health_routes,
    SubmissionsController,
    ContentController,
    AdminController,
    create_static_files_router(
        path="/static",
        directories=[Path(__file__).parent / "static"],
        name="static-files"
    )
]
