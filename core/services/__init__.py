from core.services.player_service import PlayerService
from core.services.stats_service import StatsService
from core.services.fixture_service import FixtureService
from core.services.notification_service import (
    NotificationService,
    NotificationError,
    decide_notification,
    compose,
)
from core.services.news_service import NewsService
from core.services.contact_service import ContactService
from core.services.auth_service import AuthService
from core.services.media_service import MediaService, storage_path_from_url
from core.services.session_service import SessionStore, Session

__all__ = [
    "PlayerService",
    "StatsService",
    "FixtureService",
    "NotificationService",
    "NotificationError",
    "decide_notification",
    "compose",
    "NewsService",
    "ContactService",
    "AuthService",
    "MediaService",
    "storage_path_from_url",
    "SessionStore",
    "Session",
]
