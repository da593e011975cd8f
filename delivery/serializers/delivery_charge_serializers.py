from __future__ import annotations

from decimal import Decimal
from typing import Any

from rest_framework import serializers

from ..models.branch import Branch
from ..models.delivery_charge import DeliveryCharge, PostcodeExclusion, PriceOverride
from ..utils.postcode import normalize_postcode, split_postcode

MONEY_MIN = Decimal("0")

CHARGES_REQUIRED_MESSAGE = "Charges array is required and cannot be empty"


class DeliveryChargeSerializer(serializers.ModelSerializer):
    """거리 구간별 배달비 (요청/응답 모두 camelCase)"""

    branchId = serializers.IntegerField(source="branch_id", read_only=True)
    maxDistance = serializers.DecimalField(
        source="max_distance", max_digits=8, decimal_places=2, min_value=MONEY_MIN
    )
    minSpend = serializers.DecimalField(
        source="min_spend", max_digits=10, decimal_places=2, min_value=MONEY_MIN, required=False
    )
    maxSpend = serializers.DecimalField(
        source="max_spend", max_digits=10, decimal_places=2, min_value=MONEY_MIN, required=False
    )
    charge = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=MONEY_MIN)
    isActive = serializers.BooleanField(source="is_active", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = DeliveryCharge
        fields = [
            "id",
            "branchId",
            "maxDistance",
            "minSpend",
            "maxSpend",
            "charge",
            "isActive",
            "createdAt",
            "updatedAt",
        ]

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        """최대 주문금액(0 = 상한 없음)은 최소 주문금액 이상이어야 함"""
        min_spend = attrs.get("min_spend", getattr(self.instance, "min_spend", Decimal("0")))
        max_spend = attrs.get("max_spend", getattr(self.instance, "max_spend", Decimal("0")))

        if max_spend and max_spend < min_spend:
            raise serializers.ValidationError({"maxSpend": "Maximum spend must be greater than or equal to minimum spend"})
        return attrs


class DeliveryChargeBulkSerializer(serializers.Serializer):
    """배달비 규칙 일괄 생성 요청"""

    charges = DeliveryChargeSerializer(
        many=True,
        allow_empty=False,
        error_messages={
            "required": CHARGES_REQUIRED_MESSAGE,
            "null": CHARGES_REQUIRED_MESSAGE,
            "empty": CHARGES_REQUIRED_MESSAGE,
            "not_a_list": CHARGES_REQUIRED_MESSAGE,
        },
    )


class PostcodeRuleSerializer(serializers.ModelSerializer):
    """
    우편번호 규칙 공통 시리얼라이저

    - prefix/postfix는 대문자, 공백 정리 후 저장
    - prefix에 전체 우편번호("SW1A 1AA")가 오면 분리
    - 같은 지점에 같은 우편번호 규칙은 하나만 허용
    """

    duplicate_message = "Postcode rule already exists"

    branchId = serializers.IntegerField(source="branch_id", read_only=True)
    prefix = serializers.CharField(max_length=10)
    postfix = serializers.CharField(max_length=4, required=False, allow_blank=True)
    fullPostcode = serializers.CharField(source="full_postcode", read_only=True)
    isActive = serializers.BooleanField(source="is_active", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        fields = ["id", "branchId", "prefix", "postfix", "fullPostcode", "isActive", "createdAt", "updatedAt"]
        # 지점은 요청 사용자에서 결정되므로 중복 검사는 validate()에서 직접 수행
        validators: list = []

    def validate_prefix(self, value: str) -> str:
        value = normalize_postcode(value)
        if not value:
            raise serializers.ValidationError("Postcode prefix is required")
        return value

    def validate_postfix(self, value: str) -> str:
        return normalize_postcode(value)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        prefix = attrs.get("prefix", getattr(self.instance, "prefix", ""))
        postfix = attrs.get("postfix", getattr(self.instance, "postfix", ""))

        if " " in prefix:
            prefix, inward = split_postcode(prefix)
            if postfix and postfix != inward:
                raise serializers.ValidationError({"postfix": "Postfix does not match the postcode given in prefix"})
            postfix = inward
        if len(prefix) > 8:
            raise serializers.ValidationError({"prefix": "Ensure this field has no more than 8 characters."})

        attrs["prefix"] = prefix
        attrs["postfix"] = postfix

        branch = self._get_branch()
        duplicates = self.Meta.model.objects.filter(branch=branch, prefix=prefix, postfix=postfix)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError(self.duplicate_message)

        return attrs

    def _get_branch(self) -> Branch | None:
        if self.instance is not None:
            return self.instance.branch
        return self.context.get("branch")


class PriceOverrideSerializer(PostcodeRuleSerializer):
    """우편번호 고정 배달비"""

    duplicate_message = "Price override for this postcode already exists"

    minSpend = serializers.DecimalField(
        source="min_spend", max_digits=10, decimal_places=2, min_value=MONEY_MIN, required=False
    )
    charge = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=MONEY_MIN)

    class Meta(PostcodeRuleSerializer.Meta):
        model = PriceOverride
        fields = PostcodeRuleSerializer.Meta.fields + ["minSpend", "charge"]


class PostcodeExclusionSerializer(PostcodeRuleSerializer):
    """배달 제외 우편번호"""

    duplicate_message = "Postcode exclusion already exists"

    reason = serializers.CharField(max_length=200, required=False, allow_blank=True)

    class Meta(PostcodeRuleSerializer.Meta):
        model = PostcodeExclusion
        fields = PostcodeRuleSerializer.Meta.fields + ["reason"]


class BranchLocationSerializer(serializers.ModelSerializer):
    """지점 위치 정보 (배달 거리 계산 기준점)"""

    branchId = serializers.IntegerField(source="id", read_only=True)
    formattedAddress = serializers.SerializerMethodField()
    postcode = serializers.CharField(source="postal_code", read_only=True)

    class Meta:
        model = Branch
        fields = ["branchId", "name", "latitude", "longitude", "formattedAddress", "postcode"]

    def get_formattedAddress(self, obj: Branch) -> str:
        return obj.formatted_address or obj.postal_code
