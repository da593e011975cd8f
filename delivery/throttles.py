"""
API 엔드포인트 Rate Limiting (속도 제한) 클래스

- 배달비 계산: 외부 지도 API 비용이 발생하므로 IP 단위 제한
- 전역 제한: 모든 API 요청에 대한 기본 제한

운영 환경에서는 Redis 캐시 백엔드로 여러 프로세스 간 카운트를 공유합니다.
"""

from rest_framework.throttling import AnonRateThrottle, UserRateThrottle


class DeliveryQuoteRateThrottle(AnonRateThrottle):
    """
    배달비 계산 엔드포인트 속도 제한

    캐시 미스마다 Google Distance Matrix 호출이 발생하므로
    익명 사용자의 반복 호출을 제한합니다.

    적용 대상: 배달비 계산/검증 뷰
    """

    scope = "delivery_quote"

    def get_cache_key(self, request, view):
        # 로그인 사용자도 IP 기준으로 제한
        return self.cache_format % {"scope": self.scope, "ident": self.get_ident(request)}


class GlobalAnonRateThrottle(AnonRateThrottle):
    """비인증 사용자 전역 속도 제한"""

    scope = "anon_global"


class GlobalUserRateThrottle(UserRateThrottle):
    """인증 사용자 전역 속도 제한"""

    scope = "user_global"
