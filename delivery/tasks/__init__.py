"""
Celery 태스크 패키지
모든 태스크를 여기서 임포트하여 Celery가 자동으로 발견할 수 있게 함
"""

from .cleanup_tasks import purge_expired_distance_cache_task

__all__ = [
    "purge_expired_distance_cache_task",
]
