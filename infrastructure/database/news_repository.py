"""
Supabase implementation of News repository.
"""

from datetime import datetime, timezone
from typing import Optional, List
from uuid import UUID
from core.domain.models import NewsArticle, NewsCreate
from core.interfaces.repositories import INewsRepository
from infrastructure.database.supabase_client import supabase, run_sync


class SupabaseNewsRepository(INewsRepository):
    """Supabase implementation of news repository"""

    def _to_model(self, data: dict) -> NewsArticle:
        return NewsArticle(
            id=data["id"],
            title=data["title"],
            summary=data.get("summary") or "",
            content=data.get("content") or "",
            featured_image_url=data.get("featured_image_url") or None,
            is_published=data.get("is_published", False),
            publish_date=data.get("publish_date"),
            tags=data.get("tags"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    @run_sync
    def _get_all_sync(self) -> List[dict]:
        response = supabase.table("news").select("*").order("publish_date", desc=True).execute()
        return response.data or []

    async def get_all(self) -> List[NewsArticle]:
        data = await self._get_all_sync()
        return [self._to_model(d) for d in data]

    @run_sync
    def _get_by_id_sync(self, article_id: UUID) -> Optional[dict]:
        response = supabase.table("news").select("*").eq("id", str(article_id)).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, article_id: UUID) -> Optional[NewsArticle]:
        data = await self._get_by_id_sync(article_id)
        return self._to_model(data) if data else None

    @run_sync
    def _create_sync(self, article_data: NewsCreate) -> dict:
        now = datetime.now(timezone.utc).isoformat()
        data = article_data.model_dump(mode="json")
        if not data.get("created_by"):
            data.pop("created_by", None)
        data["created_at"] = now
        data["updated_at"] = now
        response = supabase.table("news").insert(data).execute()
        return response.data[0]

    async def create(self, article_data: NewsCreate) -> NewsArticle:
        data = await self._create_sync(article_data)
        return self._to_model(data)

    @run_sync
    def _update_sync(self, article_id: UUID, article_data: dict) -> Optional[dict]:
        update_dict = {**article_data, "updated_at": datetime.now(timezone.utc).isoformat()}
        response = supabase.table("news").update(update_dict).eq("id", str(article_id)).execute()
        return response.data[0] if response.data else None

    async def update(self, article_id: UUID, article_data: dict) -> Optional[NewsArticle]:
        data = await self._update_sync(article_id, article_data)
        return self._to_model(data) if data else None

    @run_sync
    def _delete_sync(self, article_id: UUID) -> None:
        supabase.table("news").delete().eq("id", str(article_id)).execute()

    async def delete(self, article_id: UUID) -> None:
        await self._delete_sync(article_id)
