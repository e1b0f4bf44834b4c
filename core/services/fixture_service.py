"""
Fixture service - match schedule, results and the tab/filter views
used by the public fixtures page.
"""

import logging
from datetime import date
from typing import Optional, List, Dict, Tuple
from uuid import UUID
from core.domain.models import Fixture, FixtureCreate, NotificationResult
from core.domain.constants import (
    FIXTURE_TABS, ALL_FILTER, OTHER_COMPETITION, HIDDEN_ON_HOME, HOME_FIXTURE_LIMIT,
    fixture_tab,
)
from core.interfaces.repositories import IFixtureRepository
from core.services.notification_service import NotificationService, NotificationError, decide_notification
from core.utils.query_cache import QueryCache

logger = logging.getLogger(__name__)


def _is_other(fixture: Fixture) -> bool:
    return not fixture.competition.strip() or fixture.competition == OTHER_COMPETITION


class FixtureService:
    """Service for fixture operations"""

    def __init__(
        self,
        fixture_repo: IFixtureRepository,
        cache: QueryCache,
        notification_service: Optional[NotificationService] = None,
    ):
        self.fixture_repo = fixture_repo
        self.cache = cache
        self.notification_service = notification_service

    async def list_fixtures(self) -> List[Fixture]:
        """Latest match first"""
        return await self.cache.fetch(("fixtures",), self.fixture_repo.get_all)

    async def get_fixture(self, fixture_id: UUID) -> Optional[Fixture]:
        return await self.cache.fetch(
            ("fixtures", str(fixture_id)),
            lambda: self.fixture_repo.get_by_id(fixture_id),
        )

    async def create_fixture(self, fixture_data: FixtureCreate) -> Tuple[Fixture, Optional[NotificationResult], Optional[str]]:
        """
        Create a fixture and email players about it.
        Returns: (fixture, notification result or None, notification error or None)
        """
        fixture = await self.fixture_repo.create(fixture_data)
        self.cache.invalidate("fixtures")
        logger.info(f"[FIXTURES] Created {fixture.id} vs {fixture.opponent}")

        kind = decide_notification(None, fixture.status, fixture.home_score, fixture.away_score, is_new=True)
        result, error = await self._notify(fixture, kind)
        return fixture, result, error

    async def update_fixture(
        self, fixture_id: UUID, fixture_data: FixtureCreate
    ) -> Tuple[Optional[Fixture], Optional[NotificationResult], Optional[str]]:
        """
        Replace a fixture's fields; a status change notifies players.
        Returns: (fixture, notification result or None, notification error or None)
        """
        previous = await self.fixture_repo.get_by_id(fixture_id)
        if not previous:
            return None, None, None

        update_dict = fixture_data.model_dump(mode="json", exclude={"created_by"})
        fixture = await self.fixture_repo.update(fixture_id, update_dict)
        self.cache.invalidate("fixtures")
        if not fixture:
            return None, None, None

        kind = decide_notification(previous.status, fixture.status, fixture.home_score, fixture.away_score)
        result, error = await self._notify(fixture, kind)
        return fixture, result, error

    async def delete_fixture(self, fixture_id: UUID) -> None:
        await self.fixture_repo.delete(fixture_id)
        self.cache.invalidate("fixtures")
        self.cache.remove("fixtures", str(fixture_id))

    async def _notify(self, fixture: Fixture, kind) -> Tuple[Optional[NotificationResult], Optional[str]]:
        if kind is None or self.notification_service is None:
            return None, None
        try:
            return await self.notification_service.notify(fixture, kind), None
        except NotificationError as e:
            return None, f"Email sending failed: {e}"

    # === Views ===

    @staticmethod
    def filter_by_competition(fixtures: List[Fixture], competition: str = ALL_FILTER) -> List[Fixture]:
        if not competition or competition == ALL_FILTER:
            return list(fixtures)
        if competition == OTHER_COMPETITION:
            return [f for f in fixtures if _is_other(f)]
        return [f for f in fixtures if f.competition == competition]

    @classmethod
    def group_by_tab(cls, fixtures: List[Fixture], competition: str = ALL_FILTER) -> Dict[str, List[Fixture]]:
        """
        Split fixtures into the public tabs.
        Upcoming is soonest first; completed and postponed/cancelled are latest first.
        """
        groups: Dict[str, List[Fixture]] = {tab: [] for tab in FIXTURE_TABS}
        for fixture in cls.filter_by_competition(fixtures, competition):
            groups[fixture_tab(fixture.status)].append(fixture)

        groups["upcoming"].sort(key=lambda f: f.match_date)
        groups["completed"].sort(key=lambda f: f.match_date, reverse=True)
        groups["postponed_or_cancelled"].sort(key=lambda f: f.match_date, reverse=True)
        return groups

    @staticmethod
    def on_date(fixtures: List[Fixture], day: date) -> List[Fixture]:
        return [f for f in fixtures if f.match_date.date() == day]

    @staticmethod
    def competitions(fixtures: List[Fixture]) -> List[str]:
        """Filter choices: All, each named competition, then Other when some are blank"""
        names = []
        for fixture in fixtures:
            name = fixture.competition
            if name.strip() and name != OTHER_COMPETITION and name not in names:
                names.append(name)
        has_other = any(_is_other(f) for f in fixtures)
        return [ALL_FILTER] + names + ([OTHER_COMPETITION] if has_other else [])

    @staticmethod
    def home_preview(fixtures: List[Fixture]) -> List[Fixture]:
        visible = [f for f in fixtures if (f.status or "").lower() not in HIDDEN_ON_HOME]
        return visible[:HOME_FIXTURE_LIMIT]
