"""Tests for the nearby photographer search."""

from uuid import uuid4

from shutterhub.domain.instant_photo import NearbyPhotographer
from shutterhub.services.matching import MatchingService
from tests.conftest import FakeMatchingRepository


def test_find_nearby_uses_default_radius() -> None:
    close = NearbyPhotographer(photographer_id=uuid4(), distance_meters=300)
    far = NearbyPhotographer(photographer_id=uuid4(), distance_meters=1500)
    service = MatchingService(FakeMatchingRepository(nearby=[close, far]))

    result = service.find_nearby_photographers(35.68, 139.76)

    assert result.data == [close]


def test_find_nearby_failure() -> None:
    service = MatchingService(FakeMatchingRepository(fail=True))

    result = service.find_nearby_photographers(35.68, 139.76, radius_meters=5000)

    assert not result.success
    assert result.code == "unexpected"


def test_auto_match_failure() -> None:
    service = MatchingService(FakeMatchingRepository(fail=True))

    result = service.auto_match(uuid4())

    assert result.error == "Auto-matching failed"
