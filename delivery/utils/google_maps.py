from __future__ import annotations

import logging
from typing import Any

from django.conf import settings

import requests

from .distance import Coordinates, Distance

logger = logging.getLogger(__name__)


class GoogleMapsClient:
    """
    Google Maps API 클라이언트 (Geocoding, Distance Matrix)

    공식 문서: https://developers.google.com/maps/documentation
    """

    def __init__(self) -> None:
        """
        초기화
        settings.py에서 키 정보를 가져옵니다.
        """
        self.api_key: str = settings.GOOGLE_MAPS_API_KEY
        self.base_url: str = settings.GOOGLE_MAPS_BASE_URL
        self.timeout: int = settings.GOOGLE_MAPS_TIMEOUT

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def geocode_postcode(self, postcode: str) -> dict[str, Any]:
        """
        우편번호 → 좌표/주소 변환

        Args:
            postcode: 정규화된 영국 우편번호

        Returns:
            {"latitude", "longitude", "formattedAddress", "placeId", "city"}

        Raises:
            GoogleMapsError: 키 미설정, 결과 없음, API 오류
        """
        if not self.is_configured:
            raise GoogleMapsError(
                code="GEOCODER_NOT_CONFIGURED",
                message="Google Maps API key is not configured",
                status_code=503,
            )

        params = {
            "address": postcode,
            "region": "uk",
            "components": "country:GB",
            "key": self.api_key,
        }
        data = self._get("/geocode/json", params)

        results = data.get("results") or []
        if not results:
            raise GoogleMapsError(
                code="ZERO_RESULTS",
                message="No address found for the provided postcode",
            )

        result = results[0]
        try:
            location = result["geometry"]["location"]
            latitude, longitude = location["lat"], location["lng"]
        except (KeyError, TypeError):
            raise GoogleMapsError(code="INVALID_RESPONSE", message="Malformed geocoding response", status_code=502)

        city = ""
        for component in result.get("address_components", []):
            types = component.get("types", [])
            # postal_town 우선, 없으면 locality
            if "postal_town" in types:
                city = component.get("long_name", "")
                break
            if "locality" in types and not city:
                city = component.get("long_name", "")

        return {
            "latitude": latitude,
            "longitude": longitude,
            "formattedAddress": result.get("formatted_address", ""),
            "placeId": result.get("place_id", ""),
            "city": city,
        }

    def distance_matrix(self, origin: Coordinates, destination: Coordinates) -> dict[str, Any]:
        """
        도로 주행 거리 조회 (Distance Matrix API)

        Args:
            origin: 출발 좌표 (지점)
            destination: 도착 좌표 (고객)

        Returns:
            {"distance": Distance, "durationSeconds": int | None, "distanceText": str}

        Raises:
            GoogleMapsError: 경로 없음, API 오류
        """
        if not self.is_configured:
            raise GoogleMapsError(
                code="DISTANCE_NOT_CONFIGURED",
                message="Google Maps API key is not configured",
                status_code=503,
            )

        params = {
            "origins": f"{origin.lat},{origin.lng}",
            "destinations": f"{destination.lat},{destination.lng}",
            "units": "imperial",
            "mode": "driving",
            "key": self.api_key,
        }
        data = self._get("/distancematrix/json", params)

        try:
            element = data["rows"][0]["elements"][0]
        except (KeyError, IndexError, TypeError):
            raise GoogleMapsError(code="INVALID_RESPONSE", message="Malformed distance matrix response", status_code=502)

        if element.get("status") != "OK":
            raise GoogleMapsError(
                code=element.get("status", "UNKNOWN"),
                message="No driving route found between the branch and the address",
            )

        distance = element.get("distance") or {}
        if distance.get("value") is None:
            raise GoogleMapsError(
                code="INVALID_RESPONSE",
                message="Distance missing from distance matrix response",
                status_code=502,
            )

        duration = element.get("duration") or {}
        return {
            # Google은 단위 설정과 무관하게 value를 항상 미터로 반환
            "distance": Distance.from_meters(distance["value"]),
            "distanceText": distance.get("text", ""),
            "durationSeconds": duration.get("value"),
        }

    def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        """공통 GET 요청 + 상태 코드 처리"""
        url = f"{self.base_url}{path}"

        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise GoogleMapsError(
                code="TIMEOUT",
                message=f"네트워크 타임아웃: {str(e)}",
                status_code=504,
            )
        except requests.exceptions.RequestException as e:
            raise GoogleMapsError(
                code="NETWORK_ERROR",
                message=f"네트워크 오류: {str(e)}",
                status_code=502,
            )

        if response.status_code != 200:
            raise GoogleMapsError(
                code="HTTP_ERROR",
                message=f"Google Maps API request failed: {response.status_code}",
                status_code=502,
            )

        try:
            data = response.json()
        except ValueError:
            raise GoogleMapsError(
                code="INVALID_RESPONSE",
                message="Google Maps API returned a non-JSON response",
                status_code=502,
            )
        if not isinstance(data, dict):
            raise GoogleMapsError(code="INVALID_RESPONSE", message="Malformed Google Maps response", status_code=502)

        api_status = data.get("status")
        if api_status != "OK":
            logger.warning("Google Maps API 오류 응답: path=%s, status=%s", path, api_status)
            raise GoogleMapsError(
                code=api_status or "UNKNOWN",
                message=GOOGLE_MAPS_ERROR_MESSAGES.get(api_status, f"Google Maps API error: {api_status}"),
                status_code=502,
            )

        return data


class GoogleMapsError(Exception):
    """
    Google Maps API 에러
    """

    def __init__(self, code: str, message: str, status_code: int = 400) -> None:
        self.code: str = code
        self.message: str = message
        self.status_code: int = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str | int]:
        """에러를 딕셔너리로 변환"""
        return {
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
        }


# Google Maps API status 코드 매핑 (주요 에러만)
GOOGLE_MAPS_ERROR_MESSAGES: dict[str, str] = {
    "ZERO_RESULTS": "No results found for the provided postcode",
    "OVER_QUERY_LIMIT": "Google Maps API quota exceeded",
    "OVER_DAILY_LIMIT": "Google Maps API quota exceeded",
    "REQUEST_DENIED": "Google Maps API request denied - check API key",
    "INVALID_REQUEST": "Invalid Google Maps API request",
    "MAX_ELEMENTS_EXCEEDED": "Too many distance matrix elements requested",
    "UNKNOWN_ERROR": "Google Maps server error, please retry",
}
