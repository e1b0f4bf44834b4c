"""
Request-scoped helpers: the service container, session access, flashes
and page rendering.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
from uuid import UUID

from aiohttp import web

from core.services import (
    PlayerService, StatsService, FixtureService, NewsService, ContactService,
    AuthService, MediaService, SessionStore, Session,
)
from adapters.web.templates.base import layout

SESSION_COOKIE = "board_session"


@dataclass
class SiteServices:
    """Everything the handlers need, wired once at start-up"""
    players: PlayerService
    stats: StatsService
    fixtures: FixtureService
    news: NewsService
    contacts: ContactService
    auth: AuthService
    media: MediaService
    sessions: SessionStore
    team_name: str = "The Board FC"
    # Shown on the dashboard settings tab
    settings_summary: Dict[str, str] = field(default_factory=dict)


SERVICES = web.AppKey("services", SiteServices)
COOKIE_SECRET = web.AppKey("cookie_secret", str)


def services(request: web.Request) -> SiteServices:
    return request.app[SERVICES]


def get_session(request: web.Request) -> Optional[Session]:
    return request.get("session")


def ensure_session(request: web.Request) -> Session:
    """Current session, creating one (and scheduling its cookie) if needed"""
    session = request.get("session")
    if session is None:
        session = services(request).sessions.create()
        request["session"] = session
        request["session_new"] = True
    return session


def flash(request: web.Request, text: str, level: str = "info") -> None:
    SessionStore.flash(ensure_session(request), text, level)


def is_admin(request: web.Request) -> bool:
    session = get_session(request)
    return bool(session and session.signed_in and session.is_admin)


def parse_uuid(value: str) -> UUID:
    """Path id -> UUID; malformed ids are a 404, not a 500"""
    try:
        return UUID(value)
    except (ValueError, TypeError):
        raise web.HTTPNotFound()


def render(request: web.Request, title: str, body: str, status: int = 200, admin: bool = False) -> web.Response:
    site = services(request)
    html = layout(
        title,
        body,
        team_name=site.team_name,
        flashes=SessionStore.pop_flashes(get_session(request)),
        admin=admin,
    )
    return web.Response(text=html, content_type="text/html", status=status)
