from __future__ import annotations

import logging
from typing import Any

from django.db.models import QuerySet

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import serializers as drf_serializers
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ..filters import DeliveryChargeFilter, PostcodeExclusionFilter, PriceOverrideFilter
from ..models.delivery_charge import DeliveryCharge, PostcodeExclusion, PriceOverride
from ..permissions import IsAssignedToBranch, IsBranchManager
from ..serializers.delivery_charge_serializers import (
    BranchLocationSerializer,
    DeliveryChargeBulkSerializer,
    DeliveryChargeSerializer,
    PostcodeExclusionSerializer,
    PriceOverrideSerializer,
)
from ..services.delivery_charge_service import DeliveryChargeService

logger = logging.getLogger(__name__)


# ===== Swagger 문서화용 응답 Serializers =====


class RuleMessageResponseSerializer(drf_serializers.Serializer):
    """배달 규칙 메시지 응답"""

    message = drf_serializers.CharField()


class DeliveryChargeWriteResponseSerializer(DeliveryChargeSerializer):
    """배달비 규칙 생성/수정 응답 (겹치는 규칙 경고 포함)"""

    warnings = drf_serializers.ListField(child=drf_serializers.DictField(), required=False)

    class Meta(DeliveryChargeSerializer.Meta):
        fields = DeliveryChargeSerializer.Meta.fields + ["warnings"]


class DeliveryChargeBulkResponseSerializer(drf_serializers.Serializer):
    """배달비 규칙 일괄 생성 응답"""

    message = drf_serializers.CharField()
    charges = DeliveryChargeSerializer(many=True)


class BranchScopedViewSet(viewsets.ModelViewSet):
    """
    요청 사용자의 소속 지점 규칙만 다루는 ViewSet

    - 조회: request.user.branch 규칙만 (다른 지점 규칙은 404)
    - 생성: branch, created_by 자동 지정
    - 수정: updated_by 자동 지정
    """

    permission_classes = [IsBranchManager, IsAssignedToBranch]
    filter_backends = [DjangoFilterBackend]
    lookup_value_regex = r"\d+"
    model: type = DeliveryCharge
    deleted_message = "Deleted successfully"

    def get_queryset(self) -> QuerySet:
        branch_id = getattr(self.request.user, "branch_id", None)
        return self.model.objects.filter(branch_id=branch_id)

    def get_serializer_context(self) -> dict[str, Any]:
        context = super().get_serializer_context()
        context["branch"] = getattr(self.request.user, "branch", None)
        return context

    def perform_create(self, serializer: drf_serializers.BaseSerializer) -> None:
        user = self.request.user
        serializer.save(branch=user.branch, created_by=user, updated_by=user)

    def perform_update(self, serializer: drf_serializers.BaseSerializer) -> None:
        serializer.save(updated_by=self.request.user)

    def destroy(self, request: Request, *args: Any, **kwargs: Any) -> Response:
        instance = self.get_object()
        logger.info("배달 규칙 삭제: model=%s, id=%s, user=%s", self.model.__name__, instance.pk, request.user.pk)
        instance.delete()
        return Response({"message": self.deleted_message}, status=status.HTTP_200_OK)


@extend_schema_view(
    list=extend_schema(summary="거리별 배달비 목록", tags=["Delivery charges"]),
    retrieve=extend_schema(summary="거리별 배달비 상세", tags=["Delivery charges"]),
    create=extend_schema(
        responses={201: DeliveryChargeWriteResponseSerializer},
        summary="거리별 배달비 생성",
        description="같은 거리 구간에서 주문금액 범위가 겹치는 활성 규칙이 있으면 warnings에 표시합니다.",
        tags=["Delivery charges"],
    ),
    update=extend_schema(
        responses={200: DeliveryChargeWriteResponseSerializer},
        summary="거리별 배달비 수정",
        tags=["Delivery charges"],
    ),
    partial_update=extend_schema(
        responses={200: DeliveryChargeWriteResponseSerializer},
        summary="거리별 배달비 부분 수정",
        tags=["Delivery charges"],
    ),
    destroy=extend_schema(
        responses={200: RuleMessageResponseSerializer},
        summary="거리별 배달비 삭제",
        tags=["Delivery charges"],
    ),
)
class DeliveryChargeViewSet(BranchScopedViewSet):
    """거리 구간별 배달비 관리 API"""

    model = DeliveryCharge
    serializer_class = DeliveryChargeSerializer
    filterset_class = DeliveryChargeFilter
    deleted_message = "Delivery charge deleted successfully"

    def get_queryset(self) -> QuerySet:
        return super().get_queryset().order_by("max_distance", "-created_at")

    def create(self, request: Request, *args: Any, **kwargs: Any) -> Response:
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        return Response(self._with_overlap_warnings(serializer), status=status.HTTP_201_CREATED)

    def update(self, request: Request, *args: Any, **kwargs: Any) -> Response:
        partial = kwargs.pop("partial", False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response(self._with_overlap_warnings(serializer))

    @extend_schema(
        request=DeliveryChargeBulkSerializer,
        responses={201: DeliveryChargeBulkResponseSerializer},
        summary="거리별 배달비 일괄 생성",
        description="charges 배열의 모든 규칙을 생성합니다. 하나라도 유효하지 않으면 아무것도 생성하지 않습니다.",
        tags=["Delivery charges"],
    )
    @action(detail=False, methods=["post"], url_path="bulk")
    def bulk(self, request: Request) -> Response:
        serializer = DeliveryChargeBulkSerializer(data=request.data, context=self.get_serializer_context())
        serializer.is_valid(raise_exception=True)

        created = DeliveryChargeService.bulk_create(
            branch=request.user.branch,
            user=request.user,
            charges=serializer.validated_data["charges"],
        )
        return Response(
            {
                "message": f"{len(created)} delivery charges created successfully",
                "charges": DeliveryChargeSerializer(created, many=True).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @staticmethod
    def _with_overlap_warnings(serializer: DeliveryChargeSerializer) -> dict[str, Any]:
        data = dict(serializer.data)
        overlapping = DeliveryChargeService.find_overlapping_bands(serializer.instance)
        if overlapping:
            data["warnings"] = [
                {
                    "code": "OVERLAPPING_SPEND_RANGE",
                    "message": (
                        f"Spend range overlaps other active charges at {serializer.instance.max_distance} miles; "
                        "the lowest minimum spend is applied first"
                    ),
                    "chargeIds": overlapping,
                }
            ]
        return data


@extend_schema_view(
    list=extend_schema(summary="우편번호 고정 배달비 목록", tags=["Price overrides"]),
    retrieve=extend_schema(summary="우편번호 고정 배달비 상세", tags=["Price overrides"]),
    create=extend_schema(summary="우편번호 고정 배달비 생성", tags=["Price overrides"]),
    update=extend_schema(summary="우편번호 고정 배달비 수정", tags=["Price overrides"]),
    partial_update=extend_schema(summary="우편번호 고정 배달비 부분 수정", tags=["Price overrides"]),
    destroy=extend_schema(
        responses={200: RuleMessageResponseSerializer},
        summary="우편번호 고정 배달비 삭제",
        tags=["Price overrides"],
    ),
)
class PriceOverrideViewSet(BranchScopedViewSet):
    """우편번호 고정 배달비 관리 API"""

    model = PriceOverride
    serializer_class = PriceOverrideSerializer
    filterset_class = PriceOverrideFilter
    deleted_message = "Price override deleted successfully"


@extend_schema_view(
    list=extend_schema(summary="배달 제외 우편번호 목록", tags=["Postcode exclusions"]),
    retrieve=extend_schema(summary="배달 제외 우편번호 상세", tags=["Postcode exclusions"]),
    create=extend_schema(summary="배달 제외 우편번호 생성", tags=["Postcode exclusions"]),
    update=extend_schema(summary="배달 제외 우편번호 수정", tags=["Postcode exclusions"]),
    partial_update=extend_schema(summary="배달 제외 우편번호 부분 수정", tags=["Postcode exclusions"]),
    destroy=extend_schema(
        responses={200: RuleMessageResponseSerializer},
        summary="배달 제외 우편번호 삭제",
        tags=["Postcode exclusions"],
    ),
)
class PostcodeExclusionViewSet(BranchScopedViewSet):
    """배달 제외 우편번호 관리 API"""

    model = PostcodeExclusion
    serializer_class = PostcodeExclusionSerializer
    filterset_class = PostcodeExclusionFilter
    deleted_message = "Postcode exclusion deleted successfully"


class BranchLocationView(APIView):
    """소속 지점 위치 조회 API"""

    permission_classes = [IsBranchManager]

    @extend_schema(
        responses={200: BranchLocationSerializer, 400: RuleMessageResponseSerializer},
        summary="지점 위치 조회",
        description="배달 거리 계산의 기준이 되는 소속 지점의 좌표와 주소를 반환합니다.",
        tags=["Delivery charges"],
    )
    def get(self, request: Request) -> Response:
        branch = request.user.branch
        if branch is None:
            return Response(
                {"message": f"{request.user.get_role_display()} must be assigned to a branch"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(BranchLocationSerializer(branch).data)
