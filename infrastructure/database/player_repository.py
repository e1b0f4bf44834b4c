"""
Supabase implementation of Player repository.
"""

from typing import Optional, List
from uuid import UUID
from core.domain.models import Player, PlayerCreate, PlayerStatus
from core.interfaces.repositories import IPlayerRepository
from infrastructure.database.supabase_client import supabase, run_sync


def _update_dict(player_data) -> dict:
    if isinstance(player_data, dict):
        return dict(player_data)
    return player_data.model_dump(mode="json", exclude_unset=True)


class SupabasePlayerRepository(IPlayerRepository):
    """Supabase implementation of player repository"""

    def _to_model(self, data: dict) -> Player:
        """Convert database row to Player model"""
        return Player(
            id=data["id"],
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            email=data.get("email"),
            player_number=data.get("player_number"),
            position=data.get("position"),
            birth_date=data.get("birth_date"),
            height=data.get("height"),
            weight=data.get("weight"),
            bio=data.get("bio"),
            profile_image_url=data.get("profile_image_url") or None,
            joined_date=data.get("joined_date"),
            status=data.get("status") or PlayerStatus.ACTIVE.value,
            created_at=data.get("created_at"),
        )

    @run_sync
    def _get_all_sync(self) -> List[dict]:
        response = supabase.table("players").select("*").order("last_name").execute()
        return response.data or []

    async def get_all(self) -> List[Player]:
        data = await self._get_all_sync()
        return [self._to_model(d) for d in data]

    @run_sync
    def _get_by_id_sync(self, player_id: UUID) -> Optional[dict]:
        response = supabase.table("players").select("*").eq("id", str(player_id)).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, player_id: UUID) -> Optional[Player]:
        data = await self._get_by_id_sync(player_id)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, player_data: PlayerCreate) -> dict:
        data = player_data.model_dump(mode="json")
        if not data.get("created_by"):
            data.pop("created_by", None)
        response = supabase.table("players").insert(data).execute()
        return response.data[0]

    async def create(self, player_data: PlayerCreate) -> Player:
        data = await self._create_sync(player_data)
        return self._to_model(data)

    @run_sync
    def _update_sync(self, player_id: UUID, player_data) -> Optional[dict]:
        update_dict = _update_dict(player_data)
        if not update_dict:
            return None
        response = supabase.table("players").update(update_dict).eq("id", str(player_id)).execute()
        return response.data[0] if response.data else None

    async def update(self, player_id: UUID, player_data: dict) -> Optional[Player]:
        data = await self._update_sync(player_id, player_data)
        return self._to_model(data) if data else None

    @run_sync
    def _delete_sync(self, player_id: UUID) -> None:
        # Stats reference the player, remove them first
        supabase.table("player_stats").delete().eq("player_id", str(player_id)).execute()
        supabase.table("players").delete().eq("id", str(player_id)).execute()

    async def delete(self, player_id: UUID) -> None:
        await self._delete_sync(player_id)

    @run_sync
    def _get_active_with_email_sync(self) -> List[dict]:
        response = supabase.table("players")\
            .select("id, first_name, last_name, email, status")\
            .eq("status", PlayerStatus.ACTIVE.value)\
            .not_.is_("email", "null")\
            .execute()
        return response.data or []

    async def get_active_with_email(self) -> List[Player]:
        data = await self._get_active_with_email_sync()
        return [self._to_model(d) for d in data if d.get("email")]
