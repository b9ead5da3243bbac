"""Photobook creation behind the plan limit gate."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from shutterhub.domain.content import NewPhotobook, Photobook
from shutterhub.domain.results import ActionResult
from shutterhub.services.feature_limits import FeatureLimitGate

logger = logging.getLogger(__name__)

PHOTOBOOK_LIMIT_FEATURE = "photobookLimit"
PHOTOBOOK_TYPES = frozenset({"quick", "advanced"})


class PhotobookRepository(Protocol):
    """Persistence interface for photobooks."""

    def count_photobooks(self, user_id: UUID) -> int:
        """Return how many photobooks the user owns."""

    def create_photobook(self, user_id: UUID, data: NewPhotobook) -> Photobook:
        """Insert a photobook and return it."""


@dataclass
class PhotobookService:
    """Creates photobooks within the user's plan quota."""

    repository: PhotobookRepository
    feature_limit_gate: FeatureLimitGate

    def create_photobook(
        self, user_id: UUID, data: NewPhotobook
    ) -> ActionResult[Photobook]:
        if data.photobook_type not in PHOTOBOOK_TYPES:
            return ActionResult.fail(f"Unknown photobook type: {data.photobook_type}")
        try:
            current = self.repository.count_photobooks(user_id)
            check = self.feature_limit_gate.check_limit(
                user_id, PHOTOBOOK_LIMIT_FEATURE, current
            )
            if not check.allowed:
                return ActionResult.fail(
                    f"Photobook limit reached. Current plan allows {check.limit}.",
                    "limit_exceeded",
                )
            photobook = self.repository.create_photobook(user_id, data)
        except Exception:
            logger.exception("Failed to create photobook")
            return ActionResult.fail("Failed to create the photobook", "unexpected")
        self.feature_limit_gate.record_usage(user_id, PHOTOBOOK_LIMIT_FEATURE)
        return ActionResult.ok(photobook)
