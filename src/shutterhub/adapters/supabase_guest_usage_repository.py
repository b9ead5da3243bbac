"""Supabase repository for guest usage history."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from shutterhub.services.guest_usage import GuestUsageRepository


@dataclass
class SupabaseGuestUsageRepository(GuestUsageRepository):
    """Usage counting through the ``check_guest_usage_limit`` procedure."""

    client: Client

    def count_usage(self, guest_phone: str, usage_month: str) -> int:
        """Return the request count for the phone in the month bucket."""
        response = self.client.rpc(
            "check_guest_usage_limit",
            {"guest_phone": guest_phone, "current_month": usage_month},
        ).execute()
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else {}
        if isinstance(data, dict):
            return int(data.get("usage_count") or 0)
        return int(data or 0)

    def record_usage(
        self,
        guest_phone: str,
        guest_email: str | None,
        request_id: UUID,
        usage_month: str,
    ) -> None:
        self.client.table("guest_usage_history").insert(
            {
                "guest_phone": guest_phone,
                "guest_email": guest_email,
                "request_id": str(request_id),
                "usage_month": usage_month,
            }
        ).execute()
