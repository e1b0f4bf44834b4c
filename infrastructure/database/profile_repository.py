"""
Supabase implementation of Profile and NotificationLog repositories.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from core.domain.models import Profile, UserRole, NotificationLog
from core.interfaces.repositories import IProfileRepository, INotificationLogRepository
from infrastructure.database.supabase_client import supabase, run_sync

logger = logging.getLogger(__name__)


class SupabaseProfileRepository(IProfileRepository):
    """Profiles carry the site role of an auth user"""

    def _to_model(self, data: dict) -> Profile:
        role = data.get("role") or UserRole.PLAYER.value
        return Profile(
            id=data["id"],
            role=UserRole(role) if role in UserRole._value2member_map_ else UserRole.PLAYER,
            player_number=data.get("player_number"),
            position=data.get("position"),
            created_at=data.get("created_at"),
        )

    @run_sync
    def _get_by_id_sync(self, user_id: str) -> Optional[dict]:
        response = supabase.table("profiles").select("*").eq("id", user_id).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, user_id: str) -> Optional[Profile]:
        data = await self._get_by_id_sync(user_id)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, user_id: str, role: UserRole,
                     player_number: Optional[str], position: Optional[str]) -> dict:
        data = {
            "id": user_id,
            "player_number": player_number or None,
            "position": position or None,
            "role": role.value,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        response = supabase.table("profiles").insert(data).execute()
        return response.data[0]

    async def create(self, user_id: str, role: UserRole,
                     player_number: Optional[str] = None, position: Optional[str] = None) -> Profile:
        data = await self._create_sync(user_id, role, player_number, position)
        return self._to_model(data)

    @run_sync
    def _set_role_sync(self, user_id: str, role: UserRole) -> Optional[dict]:
        response = supabase.table("profiles").update({"role": role.value}).eq("id", user_id).execute()
        return response.data[0] if response.data else None

    async def set_role(self, user_id: str, role: UserRole) -> Optional[Profile]:
        data = await self._set_role_sync(user_id, role)
        return self._to_model(data) if data else None


class SupabaseNotificationLogRepository(INotificationLogRepository):
    """Audit trail of emails sent about fixtures"""

    @run_sync
    def _log_sync(self, data: dict):
        supabase.table("notification_logs").insert(data).execute()

    async def log(self, entry: NotificationLog) -> None:
        await self._log_sync(entry.model_dump(mode="json"))
