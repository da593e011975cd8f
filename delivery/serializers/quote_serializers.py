from __future__ import annotations

from decimal import Decimal
from typing import Any

from rest_framework import serializers

ORDER_TOTAL_MIN = Decimal("0.01")


class QuoteRequestSerializer(serializers.Serializer):
    """배달비 계산 요청 공통 필드"""

    # 입력 오류 시 응답 message
    required_message = "Branch ID and order total are required"

    branchId = serializers.IntegerField(min_value=1)
    orderTotal = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=ORDER_TOTAL_MIN)


class DistanceQuoteSerializer(QuoteRequestSerializer):
    """우편번호 + 거리(마일)로 계산"""

    required_message = "Branch ID, postcode, distance, and order total are required"

    postcode = serializers.CharField(max_length=10)
    distance = serializers.FloatField(min_value=0)


class CoordinatesQuoteSerializer(QuoteRequestSerializer):
    """고객 좌표로 계산 (우편번호는 제외/예외 규칙 확인용)"""

    required_message = "Branch ID, customer coordinates, and order total are required"

    customerLat = serializers.FloatField(min_value=-90, max_value=90)
    customerLng = serializers.FloatField(min_value=-180, max_value=180)
    postcode = serializers.CharField(max_length=10, required=False, allow_blank=True)


class SearchedAddressSerializer(serializers.Serializer):
    """주소 검색 결과"""

    postcode = serializers.CharField(max_length=10, required=False, allow_blank=True)
    street = serializers.CharField(required=False, allow_blank=True)
    city = serializers.CharField(required=False, allow_blank=True)
    country = serializers.CharField(required=False, allow_blank=True)
    latitude = serializers.FloatField(required=False, allow_null=True, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, allow_null=True, min_value=-180, max_value=180)


class CheckoutQuoteSerializer(QuoteRequestSerializer):
    """체크아웃 주소로 계산 (userAddress: 문자열 또는 객체)"""

    userAddress = serializers.JSONField(required=False, allow_null=True)
    searchedAddress = SearchedAddressSerializer(required=False, allow_null=True)

    def validate_userAddress(self, value: Any) -> Any:
        if value is not None and not isinstance(value, (str, dict)):
            raise serializers.ValidationError("userAddress must be a string or an object")
        return value


# ===== Swagger 문서화용 응답 Serializers =====


class DeliveryQuoteResponseSerializer(serializers.Serializer):
    """배달비 계산 응답"""

    deliverable = serializers.BooleanField()
    charge = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    type = serializers.ChoiceField(choices=["postcode_override", "distance_based"], required=False)
    message = serializers.CharField(required=False)
    code = serializers.CharField(required=False)
    distance = serializers.CharField(required=False, allow_null=True)
    distanceText = serializers.CharField(required=False)
    duration = serializers.IntegerField(required=False, allow_null=True)
    maxDistance = serializers.DecimalField(max_digits=8, decimal_places=2, required=False)
    minSpend = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    maxSpend = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    minSpendRequired = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    postcode = serializers.CharField(required=False)
    addressSource = serializers.CharField(required=False)


class DeliveryErrorResponseSerializer(serializers.Serializer):
    """배달비 계산 에러 응답"""

    deliverable = serializers.BooleanField()
    message = serializers.CharField()
    code = serializers.CharField()
    errors = serializers.DictField(required=False)
