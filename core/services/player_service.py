"""
Player service - roster reads and admin player management.
"""

import logging
from datetime import date
from typing import Optional, List, Dict
from uuid import UUID
from core.domain.models import Player, PlayerCreate, PlayerUpdate
from core.domain.constants import POSITIONS, ALL_FILTER
from core.interfaces.repositories import IPlayerRepository
from core.utils.query_cache import QueryCache

logger = logging.getLogger(__name__)


class PlayerService:
    """Service for player-related operations"""

    def __init__(self, player_repo: IPlayerRepository, cache: QueryCache):
        self.player_repo = player_repo
        self.cache = cache

    async def list_players(self) -> List[Player]:
        """All players ordered by last name"""
        return await self.cache.fetch(("players",), self.player_repo.get_all)

    async def get_player(self, player_id: UUID) -> Optional[Player]:
        return await self.cache.fetch(
            ("players", str(player_id)),
            lambda: self.player_repo.get_by_id(player_id),
        )

    async def create_player(self, player_data: PlayerCreate) -> Player:
        if player_data.joined_date is None:
            player_data = player_data.model_copy(update={"joined_date": date.today()})
        player = await self.player_repo.create(player_data)
        self.cache.invalidate("players")
        logger.info(f"[PLAYERS] Created {player.full_name} ({player.id})")
        return player

    async def update_player(self, player_id: UUID, player_data: PlayerUpdate) -> Optional[Player]:
        update_dict = player_data.model_dump(mode="json", exclude_unset=True)
        player = await self.player_repo.update(player_id, update_dict)
        self.cache.invalidate("players")
        return player

    async def delete_player(self, player_id: UUID) -> None:
        """Delete a player; their stats rows go with them"""
        await self.player_repo.delete(player_id)
        self.cache.invalidate("players")
        self.cache.remove("players", str(player_id))
        self.cache.invalidate("playerStats")
        logger.info(f"[PLAYERS] Deleted {player_id}")

    @staticmethod
    def filter_players(players: List[Player], position: str = ALL_FILTER, query: str = "") -> List[Player]:
        """Roster filter: position tab plus free-text search on name or shirt number"""
        query = (query or "").strip().lower()
        result = []
        for player in players:
            if position and position != ALL_FILTER and player.position != position:
                continue
            if query:
                in_name = query in player.full_name.lower()
                in_number = player.player_number is not None and query in str(player.player_number)
                if not (in_name or in_number):
                    continue
            result.append(player)
        return result

    @staticmethod
    def group_by_position(players: List[Player]) -> List[Dict]:
        """Players bucketed by position, in fixed roster order (empty groups kept)"""
        grouped: Dict[str, List[Player]] = {}
        for player in players:
            grouped.setdefault(player.position, []).append(player)
        return [{"position": pos, "players": grouped.get(pos, [])} for pos in POSITIONS]

    @staticmethod
    def age(player: Player, today: Optional[date] = None) -> Optional[int]:
        """Whole years since birth_date"""
        if not player.birth_date:
            return None
        today = today or date.today()
        return int((today - player.birth_date).days / 365.25)
