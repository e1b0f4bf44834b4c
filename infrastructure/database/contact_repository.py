"""
Supabase implementation of Contact repository.
"""

from datetime import datetime, timezone
from typing import Optional, List
from uuid import UUID
from postgrest.types import ReturnMethod
from core.domain.models import ContactMessage, ContactCreate, ContactStatus
from core.domain.constants import DEFAULT_CONTACT_SUBJECT
from core.interfaces.repositories import IContactRepository
from infrastructure.database.supabase_client import supabase, run_sync


class SupabaseContactRepository(IContactRepository):
    """Contact form submissions, read by admins"""

    def _to_model(self, data: dict) -> ContactMessage:
        return ContactMessage(
            id=data["id"],
            name=data.get("name") or "",
            email=data.get("email") or "",
            subject=data.get("subject"),
            message=data.get("message") or "",
            status=ContactStatus(data.get("status") or "unread"),
            created_at=data.get("created_at"),
        )

    @run_sync
    def _create_sync(self, contact_data: ContactCreate) -> None:
        data = {
            "name": contact_data.name,
            "email": contact_data.email,
            "message": contact_data.message,
            "subject": contact_data.subject or DEFAULT_CONTACT_SUBJECT,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "status": ContactStatus.UNREAD.value,
        }
        # Anonymous visitors may insert but not select (row-level security)
        supabase.table("contact").insert(data, returning=ReturnMethod.minimal).execute()

    async def create(self, contact_data: ContactCreate) -> None:
        await self._create_sync(contact_data)

    @run_sync
    def _get_all_sync(self) -> List[dict]:
        response = supabase.table("contact").select("*").order("created_at", desc=True).execute()
        return response.data or []

    async def get_all(self) -> List[ContactMessage]:
        data = await self._get_all_sync()
        return [self._to_model(d) for d in data]

    @run_sync
    def _get_by_id_sync(self, contact_id: UUID) -> Optional[dict]:
        response = supabase.table("contact").select("*").eq("id", str(contact_id)).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, contact_id: UUID) -> Optional[ContactMessage]:
        data = await self._get_by_id_sync(contact_id)
        return self._to_model(data) if data else None

    @run_sync
    def _mark_read_sync(self, contact_id: UUID) -> None:
        supabase.table("contact").update({"status": ContactStatus.READ.value})\
            .eq("id", str(contact_id))\
            .execute()

    async def mark_read(self, contact_id: UUID) -> None:
        await self._mark_read_sync(contact_id)

    @run_sync
    def _delete_sync(self, contact_id: UUID) -> None:
        supabase.table("contact").delete().eq("id", str(contact_id)).execute()

    async def delete(self, contact_id: UUID) -> None:
        await self._delete_sync(contact_id)
