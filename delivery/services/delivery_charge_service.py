"""배달비 계산 서비스 레이어

배달비 결정 순서:
    1. 주소 정규화 (우편번호 확보)
    2. 배달 제외 우편번호 → 거절
    3. 우편번호 고정 배달비 (주문금액 ≥ min_spend) → 확정
    4. 지점/고객 좌표 확보 (필요 시 지오코딩)
    5. 거리 조회 (캐시 → 공급자)
    6. 거리 구간별 배달비 → 확정 또는 거절

거절(배달 불가)은 예외가 아니라 DeliveryQuote(deliverable=False)로 반환하고,
입력/설정/외부 API 오류만 ServiceError 계열 예외로 올립니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from django.db import transaction

from delivery.models.branch import Branch
from delivery.models.delivery_charge import DeliveryCharge, PostcodeExclusion, PriceOverride
from delivery.utils.distance import Coordinates, Distance
from delivery.utils.postcode import normalize_postcode

from .address_service import AddressService
from .base import BranchConfigurationError, ServiceError, log_service_call
from .distance_service import DistanceProvider, DistanceService

if TYPE_CHECKING:
    from delivery.models.user import User
    from delivery.utils.google_maps import GoogleMapsClient

logger = logging.getLogger(__name__)

TYPE_POSTCODE_OVERRIDE = "postcode_override"
TYPE_DISTANCE_BASED = "distance_based"

REASON_EXCLUDED = "POSTCODE_EXCLUDED"
REASON_OUTSIDE_AREA = "OUTSIDE_DELIVERY_AREA"
REASON_MINIMUM_SPEND = "MINIMUM_SPEND_NOT_MET"
REASON_MAXIMUM_SPEND = "MAXIMUM_SPEND_EXCEEDED"


class BranchNotFoundError(ServiceError):
    default_code = "BRANCH_NOT_FOUND"


@dataclass
class DeliveryQuote:
    """배달비 계산 결과 (응답 변환은 to_dict)"""

    deliverable: bool
    charge: Decimal | None = None
    type: str | None = None
    message: str = ""
    code: str | None = None
    distance: Distance | None = None
    duration_seconds: int | None = None
    max_distance: Decimal | None = None
    min_spend: Decimal | None = None
    max_spend: Decimal | None = None
    min_spend_required: Decimal | None = None
    postcode: str | None = None
    address_source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"deliverable": self.deliverable}

        if self.deliverable:
            data["charge"] = self.charge
            data["type"] = self.type
        else:
            data["message"] = self.message
            data["code"] = self.code

        if self.distance is not None:
            data["distance"] = self.distance.rounded_miles()
            if self.deliverable:
                data["distanceText"] = self.distance.display()
                data["duration"] = self.duration_seconds
        elif self.type == TYPE_POSTCODE_OVERRIDE:
            data["distance"] = None

        optional = {
            "maxDistance": self.max_distance,
            "minSpend": self.min_spend,
            "maxSpend": self.max_spend,
            "minSpendRequired": self.min_spend_required,
            "postcode": self.postcode,
            "addressSource": self.address_source,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data


@dataclass
class BandMatch:
    """거리 구간 조회 결과 (band가 None이면 reason에 거절 사유)"""

    band: DeliveryCharge | None
    reason: str | None = None
    max_distance: Decimal | None = None
    min_spend_required: Decimal | None = None


class DeliveryChargeService:
    """지점별 배달비 결정 서비스"""

    EXCLUDED_MESSAGE = (
        "We do not deliver to this postcode area. Please choose a different address or select pickup instead."
    )
    BRANCH_LOCATION_MISSING_MESSAGE = "Branch location not configured. Please contact support."
    NO_CHARGES_MESSAGE = "No delivery charges configured for this branch. Please contact support."
    MAXIMUM_SPEND_MESSAGE = (
        "Your order total is above the delivery limit for this location. "
        "Please contact the branch or select pickup instead."
    )

    # ------------------------------------------------------------------
    # 배달비 결정 (상태 머신)
    # ------------------------------------------------------------------

    @classmethod
    @log_service_call
    def resolve(
        cls,
        branch_id: int,
        order_total: Decimal,
        *,
        postcode: str | None = None,
        distance: Distance | None = None,
        customer: Coordinates | None = None,
        user_address: str | dict | None = None,
        searched_address: dict | None = None,
        provider: DistanceProvider | None = None,
        geocoder: GoogleMapsClient | None = None,
    ) -> DeliveryQuote:
        """
        배달비 계산

        입력 조합:
            - postcode + distance(마일): 거리를 이미 알고 있는 경우 (외부 호출 없음)
            - customer 좌표 (+ postcode 선택)
            - user_address / searched_address: 체크아웃 주소 (필요 시 지오코딩)

        Raises:
            BranchNotFoundError: 지점 없음
            AddressError: 주소에서 우편번호를 얻지 못함
            BranchConfigurationError: 지점 좌표 또는 배달비 규칙 미설정
            DistanceProviderError: 지오코딩/거리 계산 실패
        """
        branch = cls._get_branch(branch_id)
        address_source = None

        # 1. 주소 정규화
        if user_address is not None or searched_address is not None:
            address = AddressService.normalize(searched_address=searched_address, user_address=user_address)
            postcode = address.postcode
            address_source = address.source
            customer = customer or address.coordinates
        elif postcode:
            postcode = normalize_postcode(postcode)

        if postcode:
            # 2. 배달 제외
            if PostcodeExclusion.objects.match(branch, postcode):
                logger.info("배달 제외 우편번호: branch=%s, postcode=%s", branch.pk, postcode)
                return DeliveryQuote(
                    deliverable=False,
                    message=cls.EXCLUDED_MESSAGE,
                    code=REASON_EXCLUDED,
                    postcode=postcode,
                    address_source=address_source,
                )

            # 3. 우편번호 고정 배달비 (min_spend 미달이면 거리 기반으로 진행)
            override = PriceOverride.objects.match(branch, postcode)
            if override and override.applies_to(order_total):
                return DeliveryQuote(
                    deliverable=True,
                    charge=override.charge,
                    type=TYPE_POSTCODE_OVERRIDE,
                    min_spend=override.min_spend,
                    postcode=override.full_postcode,
                    address_source=address_source,
                )

        # 4~5. 거리 확보
        duration_seconds = None
        if distance is None:
            origin = branch.coordinates
            if origin is None:
                raise BranchConfigurationError(
                    cls.BRANCH_LOCATION_MISSING_MESSAGE,
                    code="BRANCH_LOCATION_MISSING",
                    details={"addressSource": address_source} if address_source else None,
                )
            if customer is None:
                customer = DistanceService.geocode(postcode, client=geocoder)
            measurement = DistanceService.resolve(origin, customer, provider=provider)
            distance = measurement.distance
            duration_seconds = measurement.duration_seconds

        # 6. 거리 구간
        match = cls.find_band(branch, distance, order_total)
        if match.band is None:
            return cls._rejection(match, distance, postcode, address_source)

        band = match.band
        return DeliveryQuote(
            deliverable=True,
            charge=band.charge,
            type=TYPE_DISTANCE_BASED,
            distance=distance,
            duration_seconds=duration_seconds,
            max_distance=band.max_distance,
            min_spend=band.min_spend,
            max_spend=band.max_spend,
            postcode=postcode or None,
            address_source=address_source,
        )

    @classmethod
    def find_band(cls, branch: Branch, distance: Distance, order_total: Decimal) -> BandMatch:
        """
        거리 구간별 배달비 조회

        거리 이상인 가장 작은 max_distance가 해당 구간(tier)이 되고,
        그 구간 안에서 주문금액 범위에 맞는 첫 규칙을 선택합니다.
        먼 구간은 가까운 구간의 금액 불일치를 대신 처리하지 않습니다.

        Raises:
            BranchConfigurationError: 활성 배달비 규칙이 하나도 없는 경우
        """
        bands = list(DeliveryCharge.objects.for_branch(branch).active().in_lookup_order())
        if not bands:
            raise BranchConfigurationError(cls.NO_CHARGES_MESSAGE, code="NO_DELIVERY_CHARGES")

        tier = next((band.max_distance for band in bands if distance <= band.max_distance_value), None)
        if tier is None:
            return BandMatch(
                band=None,
                reason=REASON_OUTSIDE_AREA,
                max_distance=max(band.max_distance for band in bands),
            )

        candidates = [band for band in bands if band.max_distance == tier]
        for band in candidates:
            if band.covers_spend(order_total):
                return BandMatch(band=band)

        min_spend_required = min(band.min_spend for band in candidates)
        if order_total < min_spend_required:
            return BandMatch(band=None, reason=REASON_MINIMUM_SPEND, min_spend_required=min_spend_required)
        return BandMatch(band=None, reason=REASON_MAXIMUM_SPEND, max_distance=tier)

    @classmethod
    def _rejection(
        cls,
        match: BandMatch,
        distance: Distance,
        postcode: str | None,
        address_source: str | None,
    ) -> DeliveryQuote:
        if match.reason == REASON_OUTSIDE_AREA:
            message = (
                f"We do not deliver to this location. Your address is {distance.miles:.1f} miles away, "
                f"but we only deliver within {match.max_distance} miles. "
                "Please choose a closer address or select pickup instead."
            )
        elif match.reason == REASON_MINIMUM_SPEND:
            message = (
                f"Minimum order value for delivery is £{match.min_spend_required:.2f}. "
                "Please add more items to your order or choose pickup instead."
            )
        else:
            message = cls.MAXIMUM_SPEND_MESSAGE

        return DeliveryQuote(
            deliverable=False,
            message=message,
            code=match.reason,
            distance=distance,
            max_distance=match.max_distance if match.reason == REASON_OUTSIDE_AREA else None,
            min_spend_required=match.min_spend_required,
            postcode=postcode or None,
            address_source=address_source,
        )

    @staticmethod
    def _get_branch(branch_id: int) -> Branch:
        try:
            return Branch.objects.get(pk=branch_id)
        except Branch.DoesNotExist:
            raise BranchNotFoundError("Branch not found", details={"branchId": branch_id})

    # ------------------------------------------------------------------
    # 배달비 규칙 관리
    # ------------------------------------------------------------------

    @staticmethod
    def find_overlapping_bands(band: DeliveryCharge) -> list[int]:
        """같은 거리 구간에서 주문금액 범위가 겹치는 다른 활성 규칙 id 목록"""
        if not band.is_active:
            return []

        siblings = (
            DeliveryCharge.objects.for_branch(band.branch_id)
            .active()
            .filter(max_distance=band.max_distance)
            .exclude(pk=band.pk)
            .in_lookup_order()
        )
        return [other.pk for other in siblings if band.spend_overlaps(other)]

    @staticmethod
    @transaction.atomic
    def bulk_create(branch: Branch, user: User, charges: list[dict[str, Any]]) -> list[DeliveryCharge]:
        """배달비 규칙 일괄 생성 (하나라도 실패하면 전체 롤백)"""
        created = [
            DeliveryCharge.objects.create(branch=branch, created_by=user, updated_by=user, **charge)
            for charge in charges
        ]
        logger.info("배달비 규칙 일괄 생성: branch=%s, count=%d", branch.pk, len(created))
        return created
