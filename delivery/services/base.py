"""서비스 레이어 공통 모듈

- log_service_call: 서비스 진입점 호출 로깅 데코레이터
- ServiceError: 서비스 예외 기본 클래스 (code로 HTTP 응답 매핑)
"""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# 이 시간(ms)을 넘기면 느린 호출로 경고 (외부 거리 API 포함)
SLOW_CALL_THRESHOLD_MS = 500

# 로그에 남기지 않는 인자 (고객 주소/좌표)
MASKED_KWARGS = ("user_address", "searched_address", "customer", "postcode")


def log_service_call(func: Callable[..., T]) -> Callable[..., T]:
    """
    서비스 메서드 호출 로깅 데코레이터

    - 호출 시작/종료 DEBUG 로깅, 실행 시간(ms) 측정
    - SLOW_CALL_THRESHOLD_MS 이상이면 WARNING
    - ServiceError 계열(code/message 보유)은 WARNING, 그 외 예외는 ERROR + 스택 트레이스

    사용법:
        @classmethod
        @log_service_call
        def resolve(cls, ...):
            ...
    """

    @wraps(func)
    def wrapper(*args, **kwargs) -> T:
        call_name = func.__qualname__
        start_time = time.perf_counter()

        logger.debug(
            "[%s] 호출 시작 | kwargs=%s",
            call_name,
            {k: ("***" if k in MASKED_KWARGS else v) for k, v in kwargs.items()},
        )

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed = (time.perf_counter() - start_time) * 1000
            if hasattr(e, "code") and hasattr(e, "message"):
                logger.warning(
                    "[%s] 비즈니스 에러 | code=%s, message=%s, elapsed=%.2fms",
                    call_name,
                    e.code,
                    e.message,
                    elapsed,
                )
            else:
                logger.error(
                    "[%s] 예외 발생 | error=%s, elapsed=%.2fms",
                    call_name,
                    str(e),
                    elapsed,
                    exc_info=True,
                )
            raise

        elapsed = (time.perf_counter() - start_time) * 1000
        logger.debug("[%s] 호출 완료 | elapsed=%.2fms", call_name, elapsed)
        if elapsed > SLOW_CALL_THRESHOLD_MS:
            logger.warning("[%s] 느린 실행 감지 | elapsed=%.2fms", call_name, elapsed)

        return result

    return wrapper


class ServiceError(Exception):
    """
    서비스 레이어 기본 예외 클래스

    Attributes:
        message: 사용자에게 보여줄 메시지
        code: 에러 코드 (API 응답의 code 필드)
        details: 추가 정보 (응답 본문에 병합)
    """

    default_code = "SERVICE_ERROR"

    def __init__(self, message: str, code: str | None = None, details: dict | None = None):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class AddressError(ServiceError):
    """배달 주소를 해석할 수 없음 (입력 오류)"""

    default_code = "INVALID_ADDRESS"


class BranchConfigurationError(ServiceError):
    """지점 설정 누락 (좌표 미설정, 배달비 규칙 없음 등)"""

    default_code = "BRANCH_NOT_CONFIGURED"


class DistanceProviderError(ServiceError):
    """외부 지오코딩/거리 계산 실패"""

    default_code = "DISTANCE_UNAVAILABLE"
