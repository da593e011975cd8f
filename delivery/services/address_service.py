"""배달 주소 정규화 서비스

체크아웃 요청에 들어오는 여러 형태의 주소를 하나의 표준 형태로 변환합니다.

우선순위:
1. searchedAddress: 고객이 주소 검색으로 선택한 주소 (postcode 필수, 좌표 선택)
2. userAddress: 고객 저장 주소 (문자열 또는 구조화된 객체)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from delivery.utils.distance import Coordinates
from delivery.utils.postcode import extract_postcode, is_valid_postcode, normalize_postcode

from .base import AddressError

SOURCE_SEARCHED = "searched"
SOURCE_USER_STRING = "user_string"
SOURCE_USER_STRUCTURED = "user_structured"
SOURCE_NONE = "none"

DEFAULT_COUNTRY = "GB"


@dataclass(frozen=True)
class NormalizedAddress:
    """정규화된 배달 주소"""

    postcode: str
    source: str
    street: str | None = None
    city: str | None = None
    country: str = DEFAULT_COUNTRY
    coordinates: Coordinates | None = None


class AddressService:
    """주소 정규화 (외부 호출 없음)"""

    INVALID_ADDRESS_MESSAGE = "Please provide a valid delivery address with postcode."

    @classmethod
    def normalize(
        cls,
        searched_address: dict[str, Any] | None = None,
        user_address: str | dict[str, Any] | None = None,
    ) -> NormalizedAddress:
        """
        검색 주소 → 저장 주소 순으로 사용 가능한 첫 주소를 정규화
        (형식이 올바른 영국 우편번호가 있는 주소만 사용)

        Raises:
            AddressError: 어떤 입력에서도 우편번호를 얻지 못한 경우
        """
        searched_postcode = normalize_postcode(str((searched_address or {}).get("postcode") or ""))
        if is_valid_postcode(searched_postcode):
            return cls._from_searched(searched_address)

        if isinstance(user_address, str):
            postcode = extract_postcode(user_address)
            if postcode:
                return NormalizedAddress(postcode=postcode, source=SOURCE_USER_STRING)
        elif isinstance(user_address, dict):
            postcode = normalize_postcode(str(user_address.get("postcode") or user_address.get("postalCode") or ""))
            if is_valid_postcode(postcode):
                return NormalizedAddress(
                    postcode=postcode,
                    source=SOURCE_USER_STRUCTURED,
                    street=user_address.get("street") or user_address.get("addressLine1"),
                    city=user_address.get("city"),
                    country=user_address.get("country") or DEFAULT_COUNTRY,
                )

        raise AddressError(cls.INVALID_ADDRESS_MESSAGE, details={"addressSource": SOURCE_NONE})

    @staticmethod
    def _from_searched(searched_address: dict[str, Any]) -> NormalizedAddress:
        latitude = searched_address.get("latitude")
        longitude = searched_address.get("longitude")
        coordinates = None
        if latitude is not None and longitude is not None:
            coordinates = Coordinates(lat=float(latitude), lng=float(longitude))

        return NormalizedAddress(
            postcode=normalize_postcode(str(searched_address["postcode"])),
            source=SOURCE_SEARCHED,
            street=searched_address.get("street") or searched_address.get("addressLine1"),
            city=searched_address.get("city"),
            country=searched_address.get("country") or DEFAULT_COUNTRY,
            coordinates=coordinates,
        )
