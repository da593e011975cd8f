"""
배달비 비즈니스 로직 서비스 패키지

- AddressService: 체크아웃 주소 정규화
- DistanceService: 거리 캐시 + 거리 공급자
- DeliveryChargeService: 배달비 결정 상태 머신, 규칙 관리
"""

from .address_service import AddressService, NormalizedAddress
from .base import AddressError, BranchConfigurationError, DistanceProviderError, ServiceError, log_service_call
from .delivery_charge_service import BranchNotFoundError, DeliveryChargeService, DeliveryQuote
from .distance_service import (
    DistanceMeasurement,
    DistanceProvider,
    DistanceService,
    GoogleDistanceMatrixProvider,
    HaversineDistanceProvider,
    get_distance_provider,
)

__all__ = [
    # Base
    "ServiceError",
    "log_service_call",
    "AddressError",
    "BranchConfigurationError",
    "BranchNotFoundError",
    "DistanceProviderError",
    # Services
    "AddressService",
    "NormalizedAddress",
    "DistanceService",
    "DistanceMeasurement",
    "DistanceProvider",
    "GoogleDistanceMatrixProvider",
    "HaversineDistanceProvider",
    "get_distance_provider",
    "DeliveryChargeService",
    "DeliveryQuote",
]
