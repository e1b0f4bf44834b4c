"""
Web application factory.
Services are injected so tests can run the app against in-memory fakes.
"""

import logging

from aiohttp import web

from core.domain.constants import MAX_IMAGE_BYTES
from adapters.web.context import SiteServices, SERVICES, COOKIE_SECRET
from adapters.web.handlers import route_tables
from adapters.web.middleware import (
    error_middleware, session_middleware, throttling_middleware, RateLimiter,
)

logger = logging.getLogger(__name__)

# Multipart overhead on top of the largest accepted image
_BODY_HEADROOM = 1024 * 1024


def create_app(
    site: SiteServices,
    cookie_secret: str,
    contact_rate_limit: int = 5,
    sign_in_rate_limit: int = 10,
    limiter: RateLimiter = None,
) -> web.Application:
    """Create the site app with its middlewares and routes."""
    app = web.Application(
        middlewares=[
            error_middleware,
            session_middleware,
            throttling_middleware(
                {"/contact": contact_rate_limit, "/sign-in": sign_in_rate_limit},
                limiter=limiter,
            ),
        ],
        client_max_size=MAX_IMAGE_BYTES + _BODY_HEADROOM,
    )
    app[SERVICES] = site
    app[COOKIE_SECRET] = cookie_secret
    for routes in route_tables:
        app.add_routes(routes)

    logger.info(f"[WEB] App created for {site.team_name} ({len(app.router.routes())} routes)")
    return app
