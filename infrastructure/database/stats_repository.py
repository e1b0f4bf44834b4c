"""
Supabase implementation of player and team statistics repositories.
"""

from datetime import datetime, timezone
from typing import Optional, List
from uuid import UUID
from core.domain.models import PlayerStat, PlayerStatCreate, TeamStat, TeamStatCreate
from core.domain.constants import SEASON_ALL
from core.interfaces.repositories import IPlayerStatsRepository, ITeamStatsRepository
from infrastructure.database.supabase_client import supabase, run_sync


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SupabasePlayerStatsRepository(IPlayerStatsRepository):
    """Supabase implementation of player_stats repository"""

    def _to_model(self, data: dict) -> PlayerStat:
        return PlayerStat(
            id=data["id"],
            player_id=data["player_id"],
            season=data["season"],
            matches_played=data.get("matches_played") or 0,
            goals=data.get("goals") or 0,
            assists=data.get("assists") or 0,
            yellow_cards=data.get("yellow_cards") or 0,
            red_cards=data.get("red_cards") or 0,
            minutes_played=data.get("minutes_played") or 0,
            updated_at=data.get("updated_at"),
        )

    @run_sync
    def _get_all_sync(self) -> List[dict]:
        response = supabase.table("player_stats").select("*").order("season", desc=True).execute()
        return response.data or []

    async def get_all(self) -> List[PlayerStat]:
        data = await self._get_all_sync()
        return [self._to_model(d) for d in data]

    @run_sync
    def _get_by_player_sync(self, player_id: UUID, season: Optional[str]) -> List[dict]:
        query = supabase.table("player_stats").select("*").eq("player_id", str(player_id))
        if season and season != SEASON_ALL:
            query = query.eq("season", season)
        response = query.execute()
        return response.data or []

    async def get_by_player(self, player_id: UUID, season: Optional[str] = None) -> List[PlayerStat]:
        data = await self._get_by_player_sync(player_id, season)
        return [self._to_model(d) for d in data]

    @run_sync
    def _get_by_id_sync(self, stat_id: UUID) -> Optional[dict]:
        response = supabase.table("player_stats").select("*").eq("id", str(stat_id)).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, stat_id: UUID) -> Optional[PlayerStat]:
        data = await self._get_by_id_sync(stat_id)
        return self._to_model(data) if data else None

    @run_sync
    def _find_sync(self, player_id: UUID, season: str) -> Optional[dict]:
        response = supabase.table("player_stats").select("*")\
            .eq("player_id", str(player_id))\
            .eq("season", season)\
            .limit(1)\
            .execute()
        return response.data[0] if response.data else None

    async def find_by_player_season(self, player_id: UUID, season: str) -> Optional[PlayerStat]:
        data = await self._find_sync(player_id, season)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, stat_data: PlayerStatCreate, minutes_played: int) -> dict:
        data = {
            "player_id": str(stat_data.player_id),
            "season": stat_data.season,
            "matches_played": stat_data.matches_played,
            "goals": stat_data.goals,
            "assists": stat_data.assists,
            "yellow_cards": stat_data.yellow_cards,
            "red_cards": stat_data.red_cards,
            "minutes_played": minutes_played,
            "updated_at": _now(),
        }
        if stat_data.created_by:
            data["created_by"] = stat_data.created_by
        response = supabase.table("player_stats").insert(data).execute()
        return response.data[0]

    async def create(self, stat_data: PlayerStatCreate, minutes_played: int) -> PlayerStat:
        data = await self._create_sync(stat_data, minutes_played)
        return self._to_model(data)

    @run_sync
    def _update_sync(self, stat_id: UUID, stat_data: dict) -> Optional[dict]:
        update_dict = {**stat_data, "updated_at": _now()}
        response = supabase.table("player_stats").update(update_dict).eq("id", str(stat_id)).execute()
        return response.data[0] if response.data else None

    async def update(self, stat_id: UUID, stat_data: dict) -> Optional[PlayerStat]:
        data = await self._update_sync(stat_id, stat_data)
        return self._to_model(data) if data else None

    @run_sync
    def _delete_sync(self, stat_id: UUID) -> None:
        supabase.table("player_stats").delete().eq("id", str(stat_id)).execute()

    async def delete(self, stat_id: UUID) -> None:
        await self._delete_sync(stat_id)

    @run_sync
    def _get_seasons_sync(self) -> List[str]:
        response = supabase.table("player_stats").select("season").order("season", desc=True).execute()
        seen = []
        for row in response.data or []:
            if row["season"] not in seen:
                seen.append(row["season"])
        return seen

    async def get_seasons(self) -> List[str]:
        return await self._get_seasons_sync()


class SupabaseTeamStatsRepository(ITeamStatsRepository):
    """Supabase implementation of team_stats repository"""

    def _to_model(self, data: dict) -> TeamStat:
        return TeamStat(
            id=data["id"],
            season=data["season"],
            matches_played=data.get("matches_played") or 0,
            wins=data.get("wins") or 0,
            draws=data.get("draws") or 0,
            losses=data.get("losses") or 0,
            goals_for=data.get("goals_for") or 0,
            goals_against=data.get("goals_against") or 0,
            clean_sheets=data.get("clean_sheets") or 0,
            updated_at=data.get("updated_at"),
            created_by=data.get("created_by"),
        )

    @run_sync
    def _get_all_sync(self) -> List[dict]:
        response = supabase.table("team_stats").select("*").order("season", desc=True).execute()
        return response.data or []

    async def get_all(self) -> List[TeamStat]:
        data = await self._get_all_sync()
        return [self._to_model(d) for d in data]

    @run_sync
    def _get_by_id_sync(self, stat_id: UUID) -> Optional[dict]:
        response = supabase.table("team_stats").select("*").eq("id", str(stat_id)).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, stat_id: UUID) -> Optional[TeamStat]:
        data = await self._get_by_id_sync(stat_id)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, stat_data: TeamStatCreate) -> dict:
        data = stat_data.model_dump(mode="json", exclude_none=True)
        data["updated_at"] = _now()
        response = supabase.table("team_stats").insert(data).execute()
        return response.data[0]

    async def create(self, stat_data: TeamStatCreate) -> TeamStat:
        data = await self._create_sync(stat_data)
        return self._to_model(data)

    @run_sync
    def _update_sync(self, stat_id: UUID, stat_data: dict) -> Optional[dict]:
        update_dict = {**stat_data, "updated_at": _now()}
        response = supabase.table("team_stats").update(update_dict).eq("id", str(stat_id)).execute()
        return response.data[0] if response.data else None

    async def update(self, stat_id: UUID, stat_data: dict) -> Optional[TeamStat]:
        data = await self._update_sync(stat_id, stat_data)
        return self._to_model(data) if data else None

    @run_sync
    def _delete_sync(self, stat_id: UUID) -> None:
        supabase.table("team_stats").delete().eq("id", str(stat_id)).execute()

    async def delete(self, stat_id: UUID) -> None:
        await self._delete_sync(stat_id)
