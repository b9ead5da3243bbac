"""Supabase repository for photobooks."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from shutterhub.domain.content import NewPhotobook, Photobook
from shutterhub.services.photobooks import PhotobookRepository


@dataclass
class SupabasePhotobookRepository(PhotobookRepository):
    """Supabase-backed photobook repository."""

    client: Client

    def count_photobooks(self, user_id: UUID) -> int:
        response = (
            self.client.table("photobooks")
            .select("id", count="exact")
            .eq("user_id", str(user_id))
            .execute()
        )
        return int(response.count or 0)

    def create_photobook(self, user_id: UUID, data: NewPhotobook) -> Photobook:
        """Insert an unpublished photobook."""
        response = (
            self.client.table("photobooks")
            .insert(
                {
                    "user_id": str(user_id),
                    "title": data.title,
                    "description": data.description,
                    "photobook_type": data.photobook_type,
                    "is_published": False,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create photobook")
        row = response.data[0]
        return Photobook(
            id=UUID(str(row["id"])),
            user_id=UUID(str(row["user_id"])),
            title=str(row["title"]),
            photobook_type=str(row["photobook_type"]),
            is_published=bool(row.get("is_published")),
        )
