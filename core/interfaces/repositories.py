"""
Repository interfaces - abstractions for data access.
This allows swapping implementations (Supabase -> PostgreSQL -> in-memory fakes, etc.)
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from uuid import UUID
from core.domain.models import (
    Player, PlayerCreate,
    PlayerStat, PlayerStatCreate,
    TeamStat, TeamStatCreate,
    Fixture, FixtureCreate,
    NewsArticle, NewsCreate,
    ContactMessage, ContactCreate,
    Profile, UserRole,
    NotificationLog,
)


class IPlayerRepository(ABC):
    """Interface for player data access"""

    @abstractmethod
    async def get_all(self) -> List[Player]:
        """All players ordered by last name"""
        pass

    @abstractmethod
    async def get_by_id(self, player_id: UUID) -> Optional[Player]:
        pass

    @abstractmethod
    async def create(self, player_data: PlayerCreate) -> Player:
        pass

    @abstractmethod
    async def update(self, player_id: UUID, player_data: dict) -> Optional[Player]:
        pass

    @abstractmethod
    async def delete(self, player_id: UUID) -> None:
        """Delete a player together with their stats rows"""
        pass

    @abstractmethod
    async def get_active_with_email(self) -> List[Player]:
        """Active players that have an email address (notification recipients)"""
        pass


class IPlayerStatsRepository(ABC):
    """Interface for per-season player statistics"""

    @abstractmethod
    async def get_all(self) -> List[PlayerStat]:
        """All rows, newest season first"""
        pass

    @abstractmethod
    async def get_by_player(self, player_id: UUID, season: Optional[str] = None) -> List[PlayerStat]:
        pass

    @abstractmethod
    async def get_by_id(self, stat_id: UUID) -> Optional[PlayerStat]:
        pass

    @abstractmethod
    async def find_by_player_season(self, player_id: UUID, season: str) -> Optional[PlayerStat]:
        pass

    @abstractmethod
    async def create(self, stat_data: PlayerStatCreate, minutes_played: int) -> PlayerStat:
        pass

    @abstractmethod
    async def update(self, stat_id: UUID, stat_data: dict) -> Optional[PlayerStat]:
        pass

    @abstractmethod
    async def delete(self, stat_id: UUID) -> None:
        pass

    @abstractmethod
    async def get_seasons(self) -> List[str]:
        """Unique seasons, newest first"""
        pass


class ITeamStatsRepository(ABC):
    """Interface for per-season team statistics"""

    @abstractmethod
    async def get_all(self) -> List[TeamStat]:
        pass

    @abstractmethod
    async def get_by_id(self, stat_id: UUID) -> Optional[TeamStat]:
        pass

    @abstractmethod
    async def create(self, stat_data: TeamStatCreate) -> TeamStat:
        pass

    @abstractmethod
    async def update(self, stat_id: UUID, stat_data: dict) -> Optional[TeamStat]:
        pass

    @abstractmethod
    async def delete(self, stat_id: UUID) -> None:
        pass


class IFixtureRepository(ABC):
    """Interface for fixture data access"""

    @abstractmethod
    async def get_all(self) -> List[Fixture]:
        """All fixtures, latest match first"""
        pass

    @abstractmethod
    async def get_by_id(self, fixture_id: UUID) -> Optional[Fixture]:
        pass

    @abstractmethod
    async def create(self, fixture_data: FixtureCreate) -> Fixture:
        pass

    @abstractmethod
    async def update(self, fixture_id: UUID, fixture_data: dict) -> Optional[Fixture]:
        pass

    @abstractmethod
    async def delete(self, fixture_id: UUID) -> None:
        pass


class INewsRepository(ABC):
    """Interface for news articles"""

    @abstractmethod
    async def get_all(self) -> List[NewsArticle]:
        pass

    @abstractmethod
    async def get_by_id(self, article_id: UUID) -> Optional[NewsArticle]:
        pass

    @abstractmethod
    async def create(self, article_data: NewsCreate) -> NewsArticle:
        pass

    @abstractmethod
    async def update(self, article_id: UUID, article_data: dict) -> Optional[NewsArticle]:
        pass

    @abstractmethod
    async def delete(self, article_id: UUID) -> None:
        pass


class IContactRepository(ABC):
    """Interface for contact form submissions"""

    @abstractmethod
    async def create(self, contact_data: ContactCreate) -> None:
        pass

    @abstractmethod
    async def get_all(self) -> List[ContactMessage]:
        """All messages, newest first"""
        pass

    @abstractmethod
    async def get_by_id(self, contact_id: UUID) -> Optional[ContactMessage]:
        pass

    @abstractmethod
    async def mark_read(self, contact_id: UUID) -> None:
        pass

    @abstractmethod
    async def delete(self, contact_id: UUID) -> None:
        pass


class IProfileRepository(ABC):
    """Interface for auth user profiles (roles)"""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[Profile]:
        pass

    @abstractmethod
    async def create(self, user_id: str, role: UserRole,
                     player_number: Optional[str] = None, position: Optional[str] = None) -> Profile:
        pass

    @abstractmethod
    async def set_role(self, user_id: str, role: UserRole) -> Optional[Profile]:
        pass


class INotificationLogRepository(ABC):
    """Interface for the sent-notification audit trail"""

    @abstractmethod
    async def log(self, entry: NotificationLog) -> None:
        pass
