"""
Stats service - per-season player statistics, team statistics and the
home-page leader board.
"""

import logging
from datetime import date
from typing import Optional, List, Dict, Tuple
from uuid import UUID
from core.domain.models import (
    Player, PlayerStat, PlayerStatCreate, CareerTotals,
    TeamStat, TeamStatCreate,
)
from core.domain.constants import (
    MINUTES_PER_MATCH, SEASON_WINDOW_PAST, SEASON_WINDOW_FUTURE, SEASON_ALL,
    season_label,
)
from core.interfaces.repositories import IPlayerStatsRepository, ITeamStatsRepository
from core.utils.query_cache import QueryCache

logger = logging.getLogger(__name__)

DUPLICATE_SEASON_MESSAGE = "Statistics for the {season} season already exist for this player."


def minutes_for(matches_played: int) -> int:
    """Minutes are derived, never entered"""
    return (matches_played or 0) * MINUTES_PER_MATCH


def season_window(today: Optional[date] = None) -> List[str]:
    """Selectable seasons: five back, one ahead of the current year"""
    year = (today or date.today()).year
    return [season_label(year + i) for i in range(-SEASON_WINDOW_PAST, SEASON_WINDOW_FUTURE + 1)]


def current_season(today: Optional[date] = None) -> str:
    return season_label((today or date.today()).year)


class StatsService:
    """Service for player and team statistics"""

    def __init__(
        self,
        player_stats_repo: IPlayerStatsRepository,
        team_stats_repo: ITeamStatsRepository,
        cache: QueryCache,
    ):
        self.player_stats_repo = player_stats_repo
        self.team_stats_repo = team_stats_repo
        self.cache = cache

    # === Player stats ===

    async def list_player_stats(self) -> List[PlayerStat]:
        return await self.cache.fetch(("playerStats",), self.player_stats_repo.get_all)

    async def get_player_stats(self, player_id: UUID, season: Optional[str] = None) -> List[PlayerStat]:
        """Season rows for one player; season None or 'all' means every season"""
        season = season or SEASON_ALL
        return await self.cache.fetch(
            ("playerStats", str(player_id), season),
            lambda: self.player_stats_repo.get_by_player(player_id, season),
        )

    async def get_player_stat(self, stat_id: UUID) -> Optional[PlayerStat]:
        return await self.cache.fetch(
            ("playerStats", str(stat_id)),
            lambda: self.player_stats_repo.get_by_id(stat_id),
        )

    async def get_seasons(self) -> List[str]:
        return await self.cache.fetch(("seasons",), self.player_stats_repo.get_seasons)

    async def create_player_stat(self, stat_data: PlayerStatCreate) -> Tuple[bool, str, Optional[PlayerStat]]:
        """
        Add one season row for a player.
        Returns: (success, message, stat)
        """
        existing = await self.player_stats_repo.find_by_player_season(stat_data.player_id, stat_data.season)
        if existing:
            logger.info(f"[STATS] Duplicate season {stat_data.season} for player {stat_data.player_id}")
            return False, DUPLICATE_SEASON_MESSAGE.format(season=stat_data.season), None

        stat = await self.player_stats_repo.create(stat_data, minutes_for(stat_data.matches_played))
        self.cache.invalidate("playerStats")
        self.cache.invalidate("seasons")
        logger.info(f"[STATS] Added {stat.season} for player {stat.player_id}")
        return True, "Player statistics have been added successfully.", stat

    async def update_player_stat(self, stat_id: UUID, stat_data: PlayerStatCreate) -> Optional[PlayerStat]:
        update_dict = stat_data.model_dump(mode="json", exclude={"created_by", "player_id"})
        update_dict["minutes_played"] = minutes_for(stat_data.matches_played)
        stat = await self.player_stats_repo.update(stat_id, update_dict)
        self.cache.invalidate("playerStats")
        return stat

    async def delete_player_stat(self, stat_id: UUID) -> None:
        await self.player_stats_repo.delete(stat_id)
        self.cache.invalidate("playerStats")

    async def season_options(
        self,
        player_id: UUID,
        editing: Optional[PlayerStat] = None,
        today: Optional[date] = None,
    ) -> List[str]:
        """Window seasons the player has no row for yet (the edited row keeps its own)"""
        rows = await self.player_stats_repo.get_by_player(player_id)
        used = {row.season for row in rows if not editing or row.season != editing.season}
        return [s for s in season_window(today) if s not in used]

    @staticmethod
    def career_totals(stats: List[PlayerStat]) -> CareerTotals:
        totals = CareerTotals(seasons=len(stats))
        for row in stats:
            totals.matches_played += row.matches_played or 0
            totals.goals += row.goals or 0
            totals.assists += row.assists or 0
            totals.yellow_cards += row.yellow_cards or 0
            totals.red_cards += row.red_cards or 0
            totals.minutes_played += row.minutes_played or 0
        return totals

    # === Team stats ===

    async def list_team_stats(self) -> List[TeamStat]:
        """Newest season first"""
        return await self.cache.fetch(("teamStats",), self.team_stats_repo.get_all)

    async def get_team_stat(self, stat_id: UUID) -> Optional[TeamStat]:
        return await self.cache.fetch(
            ("teamStats", str(stat_id)),
            lambda: self.team_stats_repo.get_by_id(stat_id),
        )

    async def create_team_stat(self, stat_data: TeamStatCreate) -> TeamStat:
        stat = await self.team_stats_repo.create(stat_data)
        self.cache.invalidate("teamStats")
        logger.info(f"[STATS] Added team season {stat.season}")
        return stat

    async def update_team_stat(self, stat_id: UUID, stat_data: TeamStatCreate) -> Optional[TeamStat]:
        update_dict = stat_data.model_dump(mode="json", exclude={"created_by"})
        stat = await self.team_stats_repo.update(stat_id, update_dict)
        self.cache.invalidate("teamStats")
        return stat

    async def delete_team_stat(self, stat_id: UUID) -> None:
        await self.team_stats_repo.delete(stat_id)
        self.cache.invalidate("teamStats")
        self.cache.remove("teamStats", str(stat_id))

    # === Home page ===

    async def leaders(self, players: List[Player]) -> List[Dict]:
        """
        Leader cards for the home page, in display order:
        top scorer, top assists, goalkeeper clean sheets, most appearances, team goals.
        Each card: {"stat": key, "label": str, "value": int, "player": Player or None}
        """
        if not players:
            return []
        stats = await self.list_player_stats()
        team_stats = await self.list_team_stats()
        latest_team = team_stats[0] if team_stats else None
        by_id = {p.id: p for p in players}
        cards = []

        def add_for(row: Optional[PlayerStat], stat: str, label: str, value_of):
            if row and row.player_id in by_id:
                cards.append({"stat": stat, "label": label, "value": value_of(row), "player": by_id[row.player_id]})

        scorers = sorted((s for s in stats if s.goals > 0), key=lambda s: s.goals, reverse=True)
        add_for(scorers[0] if scorers else None, "goals", "Goals", lambda s: s.goals)

        assisters = sorted((s for s in stats if s.assists > 0), key=lambda s: s.assists, reverse=True)
        add_for(assisters[0] if assisters else None, "assists", "Assists", lambda s: s.assists)

        goalkeepers = [p for p in players if p.position == "Goalkeeper"]
        if goalkeepers and latest_team:
            cards.append({
                "stat": "clean_sheets",
                "label": "Clean Sheets",
                "value": latest_team.clean_sheets or 0,
                "player": goalkeepers[0],
            })

        appearances = sorted(stats, key=lambda s: s.matches_played, reverse=True)
        add_for(appearances[0] if appearances else None, "appearances", "Appearances", lambda s: s.matches_played)

        if latest_team:
            cards.append({"stat": "team_goals", "label": "Team Goals", "value": latest_team.goals_for or 0, "player": None})

        return cards
