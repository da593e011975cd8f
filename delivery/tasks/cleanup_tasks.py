from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from celery import Task, shared_task
from django.utils import timezone

from delivery.models.distance_cache import DistanceCache

logger = logging.getLogger(__name__)


@shared_task(bind=True)
def purge_expired_distance_cache_task(self: Task, grace_hours: int = 0) -> dict[str, Any]:
    """
    만료된 거리 캐시 삭제 태스크

    조회 시에는 만료 항목을 무시만 하므로, 쌓인 행을 주기적으로 정리합니다.

    Args:
        self: Celery task 인스턴스
        grace_hours: 만료 후 추가 보관 시간 (기본 0)

    Returns:
        dict: 삭제 결과 통계
    """
    try:
        cutoff = timezone.now() - timedelta(hours=grace_hours)
        deleted_count, _ = DistanceCache.objects.expired_before(cutoff).delete()

        if deleted_count:
            logger.info("만료된 거리 캐시 %d건 삭제 완료 (cutoff=%s)", deleted_count, cutoff.isoformat())
        else:
            logger.info("삭제할 만료 거리 캐시가 없습니다.")

        return {
            "success": True,
            "deleted_count": deleted_count,
            "cutoff": cutoff.isoformat(),
        }

    except Exception as e:
        logger.error("거리 캐시 정리 실패: %s", str(e), exc_info=True)
        return {
            "success": False,
            "message": str(e),
        }
