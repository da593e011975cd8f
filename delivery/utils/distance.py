"""거리/좌표 값 객체

내부 비교는 항상 미터 단위로 하고, 마일은 입력(관리자 설정값)과 표시용으로만 사용합니다.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal

METERS_PER_MILE = 1609.34
EARTH_RADIUS_METERS = 6371000.0


@dataclass(frozen=True, order=True)
class Distance:
    """단위를 가진 거리 값 (미터 기준 저장)"""

    meters: float

    @classmethod
    def from_meters(cls, meters: float | Decimal) -> Distance:
        return cls(meters=float(meters))

    @classmethod
    def from_miles(cls, miles: float | Decimal) -> Distance:
        return cls(meters=float(miles) * METERS_PER_MILE)

    @property
    def miles(self) -> float:
        return self.meters / METERS_PER_MILE

    def display(self) -> str:
        """화면 표시용 문자열 (예: "4.97 mi")"""
        return f"{self.miles:.2f} mi"

    def rounded_miles(self) -> str:
        """응답용 마일 문자열 (소수점 둘째 자리)"""
        return f"{self.miles:.2f}"


@dataclass(frozen=True)
class Coordinates:
    """위도/경도 쌍"""

    lat: float
    lng: float

    def cache_key(self) -> str:
        """
        거리 캐시 키 생성

        소수점 5자리(약 1m)로 반올림하여 인접한 좌표를 같은 키로 묶습니다.
        """
        return f"{self.lat:.5f},{self.lng:.5f}"


def haversine(origin: Coordinates, destination: Coordinates) -> Distance:
    """두 좌표 사이의 대원거리(직선거리) 계산"""
    lat1 = math.radians(origin.lat)
    lat2 = math.radians(destination.lat)
    d_lat = lat2 - lat1
    d_lng = math.radians(destination.lng - origin.lng)

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return Distance.from_meters(EARTH_RADIUS_METERS * c)
