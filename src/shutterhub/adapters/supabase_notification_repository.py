"""Supabase repository for notifications."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from shutterhub.services.notifications import Notification, NotificationRepository


@dataclass
class SupabaseNotificationRepository(NotificationRepository):
    """Supabase-backed notifications and profile lookups."""

    client: Client

    def get_display_name(self, user_id: UUID) -> str | None:
        """Return the profile display name, if the profile exists."""
        response = (
            self.client.table("profiles")
            .select("display_name")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return str(response.data[0].get("display_name") or "")

    def create_notification(self, notification: Notification) -> None:
        self.client.table("notifications").insert(
            {
                "user_id": str(notification.user_id),
                "type": notification.type,
                "category": notification.category,
                "priority": notification.priority,
                "title": notification.title,
                "message": notification.message,
                "data": notification.data,
                "related_entity_type": notification.related_entity_type,
                "related_entity_id": (
                    str(notification.related_entity_id)
                    if notification.related_entity_id
                    else None
                ),
                "action_url": notification.action_url,
                "action_label": notification.action_label,
            }
        ).execute()
