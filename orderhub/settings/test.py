"""
Django Test Settings
테스트 환경 전용 설정 (pytest, Django test)
"""

import os

from orderhub.settings.base import *  # noqa: F401, F403
from orderhub.settings.components.logging import get_logging_config

# ==========================================================================
# Test Mode Flag
# ==========================================================================

TESTING = True
DEBUG = True

# ==========================================================================
# Database
# ==========================================================================

# DATABASE_HOST가 지정되면 PostgreSQL, 아니면 SQLite 메모리 DB 사용 (CI 편의)
if os.getenv("DATABASE_HOST"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("DATABASE_NAME", "orderhub_dev"),
            "USER": os.getenv("DATABASE_USER", "postgres"),
            "PASSWORD": os.getenv("DATABASE_PASSWORD", "postgres"),
            "HOST": os.getenv("DATABASE_HOST"),
            "PORT": os.getenv("DATABASE_PORT", "5432"),
            # 테스트에서는 연결 즉시 닫기
            "CONN_MAX_AGE": 0,
            "CONN_HEALTH_CHECKS": False,
            "OPTIONS": {
                "connect_timeout": 10,
                "options": "-c statement_timeout=30000",
            },
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

# ==========================================================================
# Cache (Dummy - 테스트에서는 캐시 비활성화)
# ==========================================================================

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.dummy.DummyCache",
    }
}

# ==========================================================================
# Celery (동기 실행 - 테스트에서는 즉시 실행)
# ==========================================================================

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

# ==========================================================================
# Rate Limiting - 테스트에서는 비활성화
# ==========================================================================

REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {  # noqa: F405
    "delivery_quote": "10000/min",
    "anon_global": "100000/hour",
    "user_global": "100000/hour",
}

# ==========================================================================
# Maps - 테스트에서는 외부 API 호출 금지
# ==========================================================================

GOOGLE_MAPS_API_KEY = ""
DELIVERY_DISTANCE_PROVIDER = "haversine"

# ==========================================================================
# Logging (Quiet mode for tests)
# ==========================================================================

LOGGING = get_logging_config(debug=False)

# ==========================================================================
# Password Hashing (빠른 해싱 - 테스트 속도 향상)
# ==========================================================================

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]
