"""배달 규칙 목록 필터 (?isActive=true|false)"""

from django_filters import rest_framework as filters

from .models.delivery_charge import DeliveryCharge, PostcodeExclusion, PriceOverride


class DeliveryChargeFilter(filters.FilterSet):
    isActive = filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = DeliveryCharge
        fields = ["isActive"]


class PriceOverrideFilter(filters.FilterSet):
    isActive = filters.BooleanFilter(field_name="is_active")
    prefix = filters.CharFilter(field_name="prefix", lookup_expr="iexact")

    class Meta:
        model = PriceOverride
        fields = ["isActive", "prefix"]


class PostcodeExclusionFilter(filters.FilterSet):
    isActive = filters.BooleanFilter(field_name="is_active")
    prefix = filters.CharFilter(field_name="prefix", lookup_expr="iexact")

    class Meta:
        model = PostcodeExclusion
        fields = ["isActive", "prefix"]
