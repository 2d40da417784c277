"""HTTP boundary: Starlette routes for each cache variant."""

from .app import create_app, variant_routes
from .middleware import AccessLogMiddleware

__all__ = ["create_app", "variant_routes", "AccessLogMiddleware"]
