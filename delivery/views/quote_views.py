"""
배달비 계산 API (비로그인 허용)

- 배달 불가(제외 우편번호, 배달 거리 초과, 주문금액 조건 불충족)는 200 + deliverable=false
- 입력 오류 400, 지점 없음 404, 지점 설정 누락 422, 외부 지도 API 실패 502
"""

from __future__ import annotations

import logging
from typing import Any

from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ..serializers.quote_serializers import (
    CheckoutQuoteSerializer,
    CoordinatesQuoteSerializer,
    DeliveryErrorResponseSerializer,
    DeliveryQuoteResponseSerializer,
    DistanceQuoteSerializer,
    QuoteRequestSerializer,
)
from ..services.base import AddressError, BranchConfigurationError, DistanceProviderError, ServiceError
from ..services.delivery_charge_service import BranchNotFoundError, DeliveryChargeService
from ..services.distance_service import get_distance_provider
from ..throttles import DeliveryQuoteRateThrottle
from ..utils.distance import Coordinates, Distance

logger = logging.getLogger(__name__)

# 서비스 예외 → HTTP 상태 코드
ERROR_STATUS_MAP: list[tuple[type[ServiceError], int]] = [
    (AddressError, status.HTTP_400_BAD_REQUEST),
    (BranchNotFoundError, status.HTTP_404_NOT_FOUND),
    (BranchConfigurationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (DistanceProviderError, status.HTTP_502_BAD_GATEWAY),
]

QUOTE_RESPONSES = {
    200: DeliveryQuoteResponseSerializer,
    400: DeliveryErrorResponseSerializer,
    404: DeliveryErrorResponseSerializer,
    422: DeliveryErrorResponseSerializer,
    502: DeliveryErrorResponseSerializer,
}


class DeliveryQuoteView(APIView):
    """
    배달비 계산 뷰 공통 처리 (입력 검증 → 서비스 호출 → 응답 변환)

    추상 뷰입니다. URL에 직접 연결하지 않고, 하위 클래스가
    serializer_class와 get_resolve_kwargs()를 지정합니다.
    """

    permission_classes = [AllowAny]
    authentication_classes: list = []
    throttle_classes = [DeliveryQuoteRateThrottle]
    serializer_class: type[QuoteRequestSerializer] = QuoteRequestSerializer

    def post(self, request: Request) -> Response:
        serializer = self.serializer_class(data=request.data)
        if not serializer.is_valid():
            return Response(
                {
                    "deliverable": False,
                    "message": self.serializer_class.required_message,
                    "code": "VALIDATION_ERROR",
                    "errors": serializer.errors,
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        data = serializer.validated_data
        try:
            quote = DeliveryChargeService.resolve(
                data["branchId"],
                data["orderTotal"],
                provider=get_distance_provider(),
                **self.get_resolve_kwargs(data),
            )
        except ServiceError as e:
            return self.error_response(e)

        return Response(quote.to_dict(), status=status.HTTP_200_OK)

    def get_resolve_kwargs(self, data: dict[str, Any]) -> dict[str, Any]:
        """검증된 요청 데이터 → DeliveryChargeService.resolve() 키워드 인자"""
        raise NotImplementedError(f"{type(self).__name__}에서 get_resolve_kwargs()를 구현해야 합니다.")

    @staticmethod
    def error_response(error: ServiceError) -> Response:
        http_status = next(
            (code for error_class, code in ERROR_STATUS_MAP if isinstance(error, error_class)),
            status.HTTP_400_BAD_REQUEST,
        )
        body = {"deliverable": False, "message": error.message, "code": error.code}
        body.update({key: value for key, value in error.details.items() if key not in ("providerCode", "branchId")})
        return Response(body, status=http_status)


class CalculateDeliveryChargeView(DeliveryQuoteView):
    """우편번호 + 거리(마일)로 배달비 계산 (외부 API 호출 없음)"""

    serializer_class = DistanceQuoteSerializer

    @extend_schema(
        request=DistanceQuoteSerializer,
        responses=QUOTE_RESPONSES,
        summary="배달비 계산 (거리 입력)",
        description="이미 알고 있는 거리(마일)로 배달비를 계산합니다. 거리 캐시와 지도 API를 사용하지 않습니다.",
        examples=[
            OpenApiExample(
                "요청 예시",
                value={"branchId": 1, "postcode": "SW1A 1AA", "distance": 3.2, "orderTotal": "25.00"},
                request_only=True,
            ),
        ],
        tags=["Delivery quote"],
    )
    def post(self, request: Request) -> Response:
        return super().post(request)

    def get_resolve_kwargs(self, data: dict[str, Any]) -> dict[str, Any]:
        return {"postcode": data["postcode"], "distance": Distance.from_miles(data["distance"])}


class CalculateByCoordinatesView(DeliveryQuoteView):
    """고객 좌표로 배달비 계산"""

    serializer_class = CoordinatesQuoteSerializer

    @extend_schema(
        request=CoordinatesQuoteSerializer,
        responses=QUOTE_RESPONSES,
        summary="배달비 계산 (좌표 입력)",
        description="지점과 고객 좌표 사이의 도로 거리로 배달비를 계산합니다. postcode가 있으면 제외/고정 배달비 규칙을 먼저 확인합니다.",
        tags=["Delivery quote"],
    )
    def post(self, request: Request) -> Response:
        return super().post(request)

    def get_resolve_kwargs(self, data: dict[str, Any]) -> dict[str, Any]:
        return {
            "postcode": data.get("postcode") or None,
            "customer": Coordinates(lat=data["customerLat"], lng=data["customerLng"]),
        }


class CheckoutDeliveryChargeView(DeliveryQuoteView):
    """체크아웃 주소로 배달비 계산"""

    serializer_class = CheckoutQuoteSerializer

    @extend_schema(
        request=CheckoutQuoteSerializer,
        responses=QUOTE_RESPONSES,
        summary="배달비 계산 (체크아웃)",
        description="""
체크아웃 주소로 배달비를 계산합니다.

**주소 우선순위:**
1. searchedAddress (postcode 필수, latitude/longitude가 있으면 지오코딩 생략)
2. userAddress (문자열이면 우편번호 추출, 객체면 postcode/postalCode 사용)
        """,
        tags=["Delivery quote"],
    )
    def post(self, request: Request) -> Response:
        return super().post(request)

    def get_resolve_kwargs(self, data: dict[str, Any]) -> dict[str, Any]:
        user_address = data.get("userAddress")
        searched_address = data.get("searchedAddress")
        return {
            # 둘 다 없으면 주소 정규화 단계에서 AddressError
            "user_address": user_address if user_address is not None else "",
            "searched_address": dict(searched_address) if searched_address else None,
        }


class ValidateDeliveryView(CheckoutDeliveryChargeView):
    """체크아웃 전 배달 가능 여부 검증"""

    @extend_schema(
        request=CheckoutQuoteSerializer,
        responses=QUOTE_RESPONSES,
        summary="배달 가능 여부 검증",
        description="체크아웃 계산과 같은 규칙으로 배달 가능 여부와 배달 불가 사유를 반환합니다.",
        tags=["Delivery quote"],
    )
    def post(self, request: Request) -> Response:
        return super().post(request)
