from __future__ import annotations

from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone

from delivery.utils.distance import Coordinates, Distance


class DistanceCacheQuerySet(models.QuerySet):
    def valid(self) -> DistanceCacheQuerySet:
        """만료되지 않은 캐시만"""
        return self.filter(expires_at__gt=timezone.now())

    def expired_before(self, cutoff) -> DistanceCacheQuerySet:
        return self.filter(expires_at__lte=cutoff)

    def lookup(self, origin: Coordinates, destination: Coordinates) -> Distance | None:
        """
        캐시된 거리 조회

        키는 (출발 → 도착) 방향을 구분합니다.
        만료된 항목은 없는 것으로 취급합니다.
        """
        entry = (
            self.valid()
            .filter(from_key=origin.cache_key(), to_key=destination.cache_key())
            .only("distance_meters")
            .first()
        )
        if entry is None:
            return None
        return entry.distance

    def upsert(
        self,
        origin: Coordinates,
        destination: Coordinates,
        distance: Distance,
        source: str = "google",
        ttl_hours: int | None = None,
    ) -> DistanceCache:
        """
        거리 캐시 저장 (있으면 갱신, 없으면 생성)

        같은 키에 대한 동시 저장은 마지막 쓰기가 남습니다.
        """
        if ttl_hours is None:
            ttl_hours = settings.DISTANCE_CACHE_TTL_HOURS

        entry, _ = self.update_or_create(
            from_key=origin.cache_key(),
            to_key=destination.cache_key(),
            defaults={
                "from_lat": origin.lat,
                "from_lng": origin.lng,
                "to_lat": destination.lat,
                "to_lng": destination.lng,
                "distance_meters": distance.meters,
                "source": source,
                "expires_at": timezone.now() + timedelta(hours=ttl_hours),
            },
        )
        return entry


class DistanceCache(models.Model):
    """
    좌표 쌍별 도로 거리 캐시

    외부 거리 API 호출을 줄이기 위한 파생 데이터입니다.
    좌표는 소수점 5자리로 반올림한 문자열 키로 식별합니다.
    """

    SOURCE_GOOGLE = "google"
    SOURCE_MANUAL = "manual"
    SOURCE_CACHE = "cache"

    SOURCE_CHOICES = [
        (SOURCE_GOOGLE, "Google Distance Matrix"),
        (SOURCE_MANUAL, "직선거리 계산"),
        (SOURCE_CACHE, "캐시"),
    ]

    from_lat = models.FloatField(verbose_name="출발 위도")
    from_lng = models.FloatField(verbose_name="출발 경도")
    to_lat = models.FloatField(verbose_name="도착 위도")
    to_lng = models.FloatField(verbose_name="도착 경도")

    from_key = models.CharField(max_length=32, verbose_name="출발 키")
    to_key = models.CharField(max_length=32, verbose_name="도착 키")

    distance_meters = models.FloatField(verbose_name="거리(m)")
    source = models.CharField(max_length=10, choices=SOURCE_CHOICES, default=SOURCE_GOOGLE, verbose_name="출처")

    expires_at = models.DateTimeField(db_index=True, verbose_name="만료일시")

    created_at = models.DateTimeField(auto_now_add=True, verbose_name="생성일시")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="수정일시")

    objects = DistanceCacheQuerySet.as_manager()

    class Meta:
        db_table = "delivery_distance_cache"
        verbose_name = "거리 캐시"
        verbose_name_plural = "거리 캐시 목록"
        constraints = [
            models.UniqueConstraint(fields=["from_key", "to_key"], name="unique_distance_cache_pair"),
        ]

    def __str__(self) -> str:
        return f"{self.from_key} → {self.to_key}: {self.distance_meters:.0f}m"

    @property
    def distance(self) -> Distance:
        return Distance.from_meters(self.distance_meters)

    @property
    def is_expired(self) -> bool:
        return self.expires_at <= timezone.now()
