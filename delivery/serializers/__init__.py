from .delivery_charge_serializers import (
    BranchLocationSerializer,
    DeliveryChargeBulkSerializer,
    DeliveryChargeSerializer,
    PostcodeExclusionSerializer,
    PriceOverrideSerializer,
)
from .quote_serializers import (
    CheckoutQuoteSerializer,
    CoordinatesQuoteSerializer,
    DeliveryErrorResponseSerializer,
    DeliveryQuoteResponseSerializer,
    DistanceQuoteSerializer,
)

__all__ = [
    "BranchLocationSerializer",
    "DeliveryChargeSerializer",
    "DeliveryChargeBulkSerializer",
    "PriceOverrideSerializer",
    "PostcodeExclusionSerializer",
    "DistanceQuoteSerializer",
    "CoordinatesQuoteSerializer",
    "CheckoutQuoteSerializer",
    "DeliveryQuoteResponseSerializer",
    "DeliveryErrorResponseSerializer",
]
