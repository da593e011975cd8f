from django.urls import path

from rest_framework.routers import SimpleRouter

from delivery.views.delivery_charge_views import (
    BranchLocationView,
    DeliveryChargeViewSet,
    PostcodeExclusionViewSet,
    PriceOverrideViewSet,
)
from delivery.views.quote_views import (
    CalculateByCoordinatesView,
    CalculateDeliveryChargeView,
    CheckoutDeliveryChargeView,
    ValidateDeliveryView,
)

PREFIX = "settings/delivery-charges"

# 우편번호 규칙 라우터 (배달비 상세 라우트 `<pk>/`보다 먼저 등록)
rules_router = SimpleRouter()
rules_router.register(rf"{PREFIX}/price-overrides", PriceOverrideViewSet, basename="price-override")
rules_router.register(rf"{PREFIX}/postcode-exclusions", PostcodeExclusionViewSet, basename="postcode-exclusion")

charges_router = SimpleRouter()
charges_router.register(PREFIX, DeliveryChargeViewSet, basename="delivery-charge")

urlpatterns = [
    # 배달비 계산 (비로그인)
    path(f"{PREFIX}/calculate/", CalculateDeliveryChargeView.as_view(), name="delivery-charge-calculate"),
    path(
        f"{PREFIX}/calculate-by-coordinates/",
        CalculateByCoordinatesView.as_view(),
        name="delivery-charge-calculate-by-coordinates",
    ),
    path(
        f"{PREFIX}/calculate-checkout/",
        CheckoutDeliveryChargeView.as_view(),
        name="delivery-charge-calculate-checkout",
    ),
    path(f"{PREFIX}/validate-delivery/", ValidateDeliveryView.as_view(), name="delivery-charge-validate"),
    # 지점 위치
    path(f"{PREFIX}/branch-location/", BranchLocationView.as_view(), name="branch-location"),
    # 규칙 관리
    *rules_router.urls,
    *charges_router.urls,
]
