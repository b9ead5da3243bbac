"""Supabase repository for escrow payments."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from shutterhub.adapters.supabase_rows import parse_datetime
from shutterhub.domain.bookings import EscrowPayment, InstantBooking
from shutterhub.services.payments import AUTO_CONFIRM_HOURS, EscrowRepository

_TABLE = "escrow_payments"


@dataclass
class SupabaseEscrowRepository(EscrowRepository):
    """Supabase-backed escrow repository."""

    client: Client

    def get_escrow_for_booking(self, booking_id: UUID) -> EscrowPayment | None:
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("booking_id", str(booking_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_escrow(response.data[0])

    def upsert_escrow(
        self,
        existing_id: UUID | None,
        booking: InstantBooking,
        payment_intent_id: str,
        auto_confirm_at: datetime,
    ) -> EscrowPayment:
        """Write a pending escrow row, replacing an earlier pending attempt."""
        payload: dict[str, object] = {
            "booking_id": str(booking.id),
            "stripe_payment_intent_id": payment_intent_id,
            "total_amount": booking.total_amount,
            "platform_fee": booking.platform_fee,
            "photographer_earnings": booking.photographer_earnings,
            "escrow_status": "pending",
            "delivery_status": "waiting",
            "auto_confirm_hours": AUTO_CONFIRM_HOURS,
            "auto_confirm_at": auto_confirm_at.isoformat(),
        }
        if existing_id is not None:
            payload["id"] = str(existing_id)
        response = self.client.table(_TABLE).upsert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to save escrow payment")
        return _parse_escrow(response.data[0])

    def mark_escrowed(
        self, payment_intent_id: str, escrowed_at: datetime
    ) -> EscrowPayment | None:
        """Mark the escrow for a payment intent as funded."""
        response = (
            self.client.table(_TABLE)
            .update(
                {
                    "escrow_status": "escrowed",
                    "escrowed_at": escrowed_at.isoformat(),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("stripe_payment_intent_id", payment_intent_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_escrow(response.data[0])

    def mark_delivered(
        self, booking_id: UUID, delivered_at: datetime
    ) -> EscrowPayment | None:
        response = (
            self.client.table(_TABLE)
            .update(
                {
                    "delivery_status": "delivered",
                    "delivered_at": delivered_at.isoformat(),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("booking_id", str(booking_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_escrow(response.data[0])

    def complete_escrow(
        self, escrow_id: UUID, completed_at: datetime
    ) -> EscrowPayment | None:
        """Release a funded escrow; rows in any other state are left alone."""
        response = (
            self.client.table(_TABLE)
            .update(
                {
                    "escrow_status": "completed",
                    "delivery_status": "confirmed",
                    "confirmed_at": completed_at.isoformat(),
                    "completed_at": completed_at.isoformat(),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(escrow_id))
            .eq("escrow_status", "escrowed")
            .execute()
        )
        if not response.data:
            return None
        return _parse_escrow(response.data[0])

    def mark_disputed(
        self, escrow_id: UUID, reason: str, disputed_at: datetime
    ) -> None:
        self.client.table(_TABLE).update(
            {
                "escrow_status": "disputed",
                "dispute_reason": reason,
                "dispute_created_at": disputed_at.isoformat(),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(escrow_id)).execute()

    def list_due_for_auto_confirm(
        self, now: datetime, limit: int
    ) -> list[EscrowPayment]:
        """Return delivered escrows whose confirmation window has closed."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("escrow_status", "escrowed")
            .eq("delivery_status", "delivered")
            .eq("auto_confirm_enabled", True)
            .lte("auto_confirm_at", now.isoformat())
            .limit(limit)
            .execute()
        )
        return [_parse_escrow(row) for row in response.data or []]


def _parse_escrow(row: dict[str, object]) -> EscrowPayment:
    return EscrowPayment(
        id=UUID(str(row["id"])),
        booking_id=UUID(str(row["booking_id"])),
        stripe_payment_intent_id=str(row["stripe_payment_intent_id"]),
        total_amount=int(row["total_amount"]),
        platform_fee=int(row["platform_fee"]),
        photographer_earnings=int(row["photographer_earnings"]),
        escrow_status=str(row["escrow_status"]),
        delivery_status=str(row.get("delivery_status") or "waiting"),
        auto_confirm_at=parse_datetime(row.get("auto_confirm_at")),
        escrowed_at=parse_datetime(row.get("escrowed_at")),
        delivered_at=parse_datetime(row.get("delivered_at")),
        completed_at=parse_datetime(row.get("completed_at")),
    )
