from .branch import Branch
from .delivery_charge import DeliveryCharge, PostcodeExclusion, PriceOverride
from .distance_cache import DistanceCache
from .user import User

__all__ = [
    "Branch",
    "User",
    "DeliveryCharge",
    "PriceOverride",
    "PostcodeExclusion",
    "DistanceCache",
]
