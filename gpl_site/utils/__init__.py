"""Utility functions for the GPL website."""

from litestar import Request
from litestar.connection import ASGIConnection

# First path segment of every route the app serves
ROUTE_ROOTS = frozenset({
    "admin", "api", "static", "health", "ping",
    "services", "safety", "faq", "news", "status", "contact",
})


def get_base_path(request: ASGIConnection) -> str:
    """
    Extract the base path from the request (e.g., '/gpl' if the site is served at /gpl).
    
    Uses the request's root_path if available (set by uvicorn --root-path option),
    otherwise takes the segments in front of the first segment that starts one of
    the app's own routes. Segments further down (an article slug such as
    "api-outage-update") are never inspected.
    """
    scope = getattr(request, "scope", None)
    if scope:
        root_path = scope.get("root_path", "")
        if root_path:
            return root_path
    
    segments = [s for s in request.url.path.split("/") if s]
    for index, segment in enumerate(segments):
        if segment in ROUTE_ROOTS:
            return "".join(f"/{s}" for s in segments[:index])
    
    return ""


def is_api_request(request: Request) -> bool:
    """True for JSON API routes, which never redirect."""
    path = request.url.path
    base_path = get_base_path(request)
    if base_path and path.startswith(base_path):
        path = path[len(base_path):]
    return path == "/api" or path.startswith("/api/")
