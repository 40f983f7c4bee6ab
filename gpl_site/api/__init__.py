"""GPL website API routes."""

from gpl_site.api.admin import AdminController
from gpl_site.api.content import ContentController
from gpl_site.api.health import routes as health_routes
from gpl_site.api.submissions import SubmissionsController

__all__ = ["AdminController", "ContentController", "SubmissionsController", "health_routes"]
