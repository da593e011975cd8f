from .delivery_charge_views import (
    BranchLocationView,
    DeliveryChargeViewSet,
    PostcodeExclusionViewSet,
    PriceOverrideViewSet,
)
from .quote_views import (
    CalculateByCoordinatesView,
    CalculateDeliveryChargeView,
    CheckoutDeliveryChargeView,
    ValidateDeliveryView,
)

__all__ = [
    "BranchLocationView",
    "DeliveryChargeViewSet",
    "PriceOverrideViewSet",
    "PostcodeExclusionViewSet",
    "CalculateDeliveryChargeView",
    "CalculateByCoordinatesView",
    "CheckoutDeliveryChargeView",
    "ValidateDeliveryView",
]
