from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from delivery.services.distance_service import DistanceMeasurement, DistanceProvider
from delivery.tests.factories import BranchFactory, DeliveryChargeFactory, TestConstants, UserFactory
from delivery.utils.distance import Coordinates, Distance
from delivery.utils.google_maps import GoogleMapsError

# ==========================================
# 1. 전역 설정 (Session Scope)
# ==========================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging_for_tests():
    """
    테스트 환경에서 로그 propagation 활성화

    caplog가 로그를 캡처할 수 있도록 propagate=True로 설정
    """
    import logging

    for logger_name in ["delivery.services", "delivery.views", "delivery.utils", "delivery.tasks"]:
        logging.getLogger(logger_name).propagate = True


# ==========================================
# 2. 거리 공급자 Fake
# ==========================================


class FakeDistanceProvider(DistanceProvider):
    """
    호출 기록을 남기는 거리 공급자

    사용 예시:
        provider = FakeDistanceProvider(meters=4000)
        provider = FakeDistanceProvider(error=GoogleMapsError("ZERO_RESULTS", "..."))
    """

    source = "google"

    def __init__(self, meters: float = 4000.0, error: GoogleMapsError | None = None) -> None:
        self.meters = meters
        self.error = error
        self.calls: list[tuple[Coordinates, Coordinates]] = []

    def measure(self, origin: Coordinates, destination: Coordinates) -> DistanceMeasurement:
        self.calls.append((origin, destination))
        if self.error is not None:
            raise self.error
        return DistanceMeasurement(distance=Distance.from_meters(self.meters), source=self.source, duration_seconds=600)


@pytest.fixture
def fake_provider():
    return FakeDistanceProvider()


# ==========================================
# 3. 클라이언트 / 사용자 / 지점 Fixture
# ==========================================


@pytest.fixture
def api_client():
    """DRF APIClient 인스턴스"""
    return APIClient()


@pytest.fixture
def branch(db):
    """좌표가 설정된 기본 지점"""
    return BranchFactory()


@pytest.fixture
def manager_user(branch):
    """branch 소속 매니저"""
    return UserFactory.manager(username="manager", branch=branch)


@pytest.fixture
def manager_client(api_client, manager_user):
    """매니저로 인증된 클라이언트"""
    api_client.force_authenticate(user=manager_user)
    return api_client


@pytest.fixture
def customer_coordinates():
    return Coordinates(lat=TestConstants.CUSTOMER_LAT, lng=TestConstants.CUSTOMER_LNG)


@pytest.fixture
def standard_bands(branch):
    """
    기본 거리 구간

    - 5마일 이내, £0 ~ £20 → £3
    - 10마일 이내, £0 ~ 상한 없음 → £5
    """
    return [
        DeliveryChargeFactory(
            branch=branch,
            max_distance=Decimal("5"),
            min_spend=Decimal("0"),
            max_spend=Decimal("20"),
            charge=Decimal("3"),
        ),
        DeliveryChargeFactory(
            branch=branch,
            max_distance=Decimal("10"),
            min_spend=Decimal("0"),
            max_spend=Decimal("0"),
            charge=Decimal("5"),
        ),
    ]
