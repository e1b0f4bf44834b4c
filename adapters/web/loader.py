"""
Web site loader - initializes repositories, services and the app.
"""

from config.settings import settings
from config.features import features

# Infrastructure
from infrastructure.database import (
    SupabasePlayerRepository,
    SupabasePlayerStatsRepository,
    SupabaseTeamStatsRepository,
    SupabaseFixtureRepository,
    SupabaseNewsRepository,
    SupabaseContactRepository,
    SupabaseProfileRepository,
    SupabaseNotificationLogRepository,
)
from infrastructure.platform import SupabaseAuthProvider, SupabaseFileStorage
from infrastructure.mail import create_email_sender

# Core services
from core.services import (
    PlayerService, StatsService, FixtureService, NotificationService, NewsService,
    ContactService, AuthService, MediaService, SessionStore,
)
from core.utils.query_cache import QueryCache
from core.domain.constants import ROLE_CHECK_SECONDS

from adapters.web.context import SiteServices


# === REPOSITORIES ===
player_repo = SupabasePlayerRepository()
player_stats_repo = SupabasePlayerStatsRepository()
team_stats_repo = SupabaseTeamStatsRepository()
fixture_repo = SupabaseFixtureRepository()
news_repo = SupabaseNewsRepository()
contact_repo = SupabaseContactRepository()
profile_repo = SupabaseProfileRepository()
notification_log_repo = SupabaseNotificationLogRepository()


# === PLATFORM ===
auth_provider = SupabaseAuthProvider()
file_storage = SupabaseFileStorage(bucket=settings.storage_bucket)
email_sender = create_email_sender(settings)
query_cache = QueryCache(ttl_seconds=features.QUERY_CACHE_TTL, retries=features.QUERY_RETRIES)


# === BUSINESS SERVICES ===
notification_service = NotificationService(
    player_repo=player_repo,
    log_repo=notification_log_repo,
    sender=email_sender,
    team_name=settings.team_name,
)
site = SiteServices(
    players=PlayerService(player_repo=player_repo, cache=query_cache),
    stats=StatsService(
        player_stats_repo=player_stats_repo,
        team_stats_repo=team_stats_repo,
        cache=query_cache,
    ),
    fixtures=FixtureService(
        fixture_repo=fixture_repo,
        cache=query_cache,
        notification_service=notification_service if features.NOTIFICATIONS_ENABLED else None,
    ),
    news=NewsService(news_repo=news_repo, cache=query_cache),
    contacts=ContactService(contact_repo=contact_repo),
    auth=AuthService(
        auth_provider=auth_provider,
        profile_repo=profile_repo,
        cache=QueryCache(ttl_seconds=ROLE_CHECK_SECONDS, retries=features.QUERY_RETRIES),
    ),
    media=MediaService(storage=file_storage, bucket=settings.storage_bucket),
    sessions=SessionStore(timeout_minutes=settings.session_timeout_minutes),
    team_name=settings.team_name,
    settings_summary={
        "Team name": settings.team_name,
        "Environment": settings.env,
        "Email provider": settings.email_provider,
        "Sender address": settings.email_from,
        "Storage bucket": settings.storage_bucket,
        "Database schema": settings.db_schema,
        "Session timeout": f"{settings.session_timeout_minutes} minutes",
        "Notifications": "on" if features.NOTIFICATIONS_ENABLED else "off",
    },
)
