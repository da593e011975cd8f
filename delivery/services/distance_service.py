"""배달 거리 계산 서비스

거리 공급자(DistanceProvider) 추상화와 캐시 우선 조회를 담당합니다.

흐름:
    캐시 조회 (만료 안 된 항목) → 없으면 공급자 호출 → 결과를 캐시에 저장
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from django.conf import settings

from delivery.models.distance_cache import DistanceCache
from delivery.utils.distance import Coordinates, Distance, haversine
from delivery.utils.google_maps import GoogleMapsClient, GoogleMapsError

from .base import DistanceProviderError, log_service_call

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistanceMeasurement:
    """거리 계산 결과"""

    distance: Distance
    source: str
    duration_seconds: int | None = None


class DistanceProvider(ABC):
    """두 좌표 사이의 배달 거리를 계산하는 공급자"""

    source: str = ""

    @abstractmethod
    def measure(self, origin: Coordinates, destination: Coordinates) -> DistanceMeasurement:
        """
        Raises:
            GoogleMapsError: 외부 API 실패
        """


class GoogleDistanceMatrixProvider(DistanceProvider):
    """Google Distance Matrix 도로 주행 거리"""

    source = DistanceCache.SOURCE_GOOGLE

    def __init__(self, client: GoogleMapsClient | None = None) -> None:
        self.client = client or GoogleMapsClient()

    def measure(self, origin: Coordinates, destination: Coordinates) -> DistanceMeasurement:
        result = self.client.distance_matrix(origin, destination)
        return DistanceMeasurement(
            distance=result["distance"],
            source=self.source,
            duration_seconds=result.get("durationSeconds"),
        )


class HaversineDistanceProvider(DistanceProvider):
    """직선거리 (API 키가 없는 환경용)"""

    source = DistanceCache.SOURCE_MANUAL

    def measure(self, origin: Coordinates, destination: Coordinates) -> DistanceMeasurement:
        return DistanceMeasurement(distance=haversine(origin, destination), source=self.source)


def get_distance_provider() -> DistanceProvider:
    """settings 기준 거리 공급자 선택 (키가 없으면 haversine)"""
    if settings.DELIVERY_DISTANCE_PROVIDER == "haversine" or not settings.GOOGLE_MAPS_API_KEY:
        return HaversineDistanceProvider()
    return GoogleDistanceMatrixProvider()


class DistanceService:
    """거리/좌표 조회 서비스"""

    DISTANCE_FAILED_MESSAGE = "Unable to calculate delivery distance. Please try again."
    GEOCODE_FAILED_MESSAGE = "Unable to verify this address. Please check your postcode and try again."

    @classmethod
    @log_service_call
    def resolve(
        cls,
        origin: Coordinates,
        destination: Coordinates,
        provider: DistanceProvider | None = None,
    ) -> DistanceMeasurement:
        """
        캐시 우선 거리 조회

        캐시 미스 시 공급자 결과를 배달 가능 여부와 무관하게 캐시에 저장합니다.

        Raises:
            DistanceProviderError: 공급자 호출 실패 (재시도하지 않음)
        """
        cached = DistanceCache.objects.lookup(origin, destination)
        if cached is not None:
            logger.debug("거리 캐시 적중: %s → %s", origin.cache_key(), destination.cache_key())
            return DistanceMeasurement(distance=cached, source=DistanceCache.SOURCE_CACHE)

        provider = provider or get_distance_provider()
        try:
            measurement = provider.measure(origin, destination)
        except GoogleMapsError as e:
            logger.warning("거리 계산 실패: code=%s, message=%s", e.code, e.message)
            raise DistanceProviderError(
                cls.DISTANCE_FAILED_MESSAGE,
                code="DISTANCE_UNAVAILABLE",
                details={"providerCode": e.code},
            )

        DistanceCache.objects.upsert(origin, destination, measurement.distance, source=measurement.source)
        return measurement

    @classmethod
    @log_service_call
    def geocode(cls, postcode: str, client: GoogleMapsClient | None = None) -> Coordinates:
        """
        우편번호 → 좌표

        Raises:
            DistanceProviderError: 지오코딩 실패 또는 미설정
        """
        client = client or GoogleMapsClient()
        try:
            result = client.geocode_postcode(postcode)
        except GoogleMapsError as e:
            logger.warning("지오코딩 실패: postcode=%s, code=%s", postcode, e.code)
            raise DistanceProviderError(
                cls.GEOCODE_FAILED_MESSAGE,
                code="GEOCODING_FAILED",
                details={"providerCode": e.code},
            )
        return Coordinates(lat=result["latitude"], lng=result["longitude"])
