"""
Supabase implementation of Fixture repository.
"""

from typing import Optional, List
from uuid import UUID
from core.domain.models import Fixture, FixtureCreate
from core.interfaces.repositories import IFixtureRepository
from infrastructure.database.supabase_client import supabase, run_sync


class SupabaseFixtureRepository(IFixtureRepository):
    """Supabase implementation of fixture repository"""

    def _to_model(self, data: dict) -> Fixture:
        """Convert database row to Fixture model"""
        return Fixture(
            id=data["id"],
            match_date=data["match_date"],
            opponent=data["opponent"],
            competition=data.get("competition"),
            location=data.get("location"),
            is_home_game=data.get("is_home_game", True),
            home_score=data.get("home_score"),
            away_score=data.get("away_score"),
            status=data.get("status") or "upcoming",
            ticket_link=data.get("ticket_link") or None,
            notes=data.get("notes") or None,
            opponent_logo_url=data.get("opponent_logo_url") or None,
        )

    @run_sync
    def _get_all_sync(self) -> List[dict]:
        response = supabase.table("fixtures").select("*").order("match_date", desc=True).execute()
        return response.data or []

    async def get_all(self) -> List[Fixture]:
        data = await self._get_all_sync()
        return [self._to_model(d) for d in data]

    @run_sync
    def _get_by_id_sync(self, fixture_id: UUID) -> Optional[dict]:
        response = supabase.table("fixtures").select("*").eq("id", str(fixture_id)).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, fixture_id: UUID) -> Optional[Fixture]:
        data = await self._get_by_id_sync(fixture_id)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, fixture_data: FixtureCreate) -> dict:
        data = fixture_data.model_dump(mode="json")
        if not data.get("created_by"):
            data.pop("created_by", None)
        response = supabase.table("fixtures").insert(data).execute()
        return response.data[0]

    async def create(self, fixture_data: FixtureCreate) -> Fixture:
        data = await self._create_sync(fixture_data)
        return self._to_model(data)

    @run_sync
    def _update_sync(self, fixture_id: UUID, fixture_data: dict) -> Optional[dict]:
        if not fixture_data:
            return None
        response = supabase.table("fixtures").update(fixture_data).eq("id", str(fixture_id)).execute()
        return response.data[0] if response.data else None

    async def update(self, fixture_id: UUID, fixture_data: dict) -> Optional[Fixture]:
        data = await self._update_sync(fixture_id, fixture_data)
        return self._to_model(data) if data else None

    @run_sync
    def _delete_sync(self, fixture_id: UUID) -> None:
        supabase.table("fixtures").delete().eq("id", str(fixture_id)).execute()

    async def delete(self, fixture_id: UUID) -> None:
        await self._delete_sync(fixture_id)
