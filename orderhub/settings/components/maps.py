"""
Maps Configuration (Google Maps)
지오코딩/거리 계산 관련 모든 설정을 관리합니다.
"""

import os

# ==========================================
# Google Maps 설정
# ==========================================
#
# Google Cloud Console에서 발급받은 키를 환경변수로 설정하세요.
# Geocoding API, Distance Matrix API가 활성화되어 있어야 합니다.
#
# .env 파일 예시:
# GOOGLE_MAPS_API_KEY=AIza...
# DELIVERY_DISTANCE_PROVIDER=google   # google | haversine

# Google Maps API 키 (비어 있으면 haversine 거리 계산으로 대체)
GOOGLE_MAPS_API_KEY = os.environ.get("GOOGLE_MAPS_API_KEY", "")

# Google Maps API URL
GOOGLE_MAPS_BASE_URL = os.environ.get("GOOGLE_MAPS_BASE_URL", "https://maps.googleapis.com/maps/api")

# 외부 API 요청 타임아웃 (초)
GOOGLE_MAPS_TIMEOUT = int(os.environ.get("GOOGLE_MAPS_TIMEOUT", 10))

# 거리 계산 공급자 선택
DELIVERY_DISTANCE_PROVIDER = os.environ.get("DELIVERY_DISTANCE_PROVIDER", "google")

# 거리 캐시 유효기간 (시간) - 기본 4주
DISTANCE_CACHE_TTL_HOURS = int(os.environ.get("DISTANCE_CACHE_TTL_HOURS", 4032))
