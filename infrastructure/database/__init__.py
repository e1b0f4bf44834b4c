from infrastructure.database.player_repository import SupabasePlayerRepository
from infrastructure.database.stats_repository import SupabasePlayerStatsRepository, SupabaseTeamStatsRepository
from infrastructure.database.fixture_repository import SupabaseFixtureRepository
from infrastructure.database.news_repository import SupabaseNewsRepository
from infrastructure.database.contact_repository import SupabaseContactRepository
from infrastructure.database.profile_repository import SupabaseProfileRepository, SupabaseNotificationLogRepository

__all__ = [
    "SupabasePlayerRepository",
    "SupabasePlayerStatsRepository",
    "SupabaseTeamStatsRepository",
    "SupabaseFixtureRepository",
    "SupabaseNewsRepository",
    "SupabaseContactRepository",
    "SupabaseProfileRepository",
    "SupabaseNotificationLogRepository",
]
