"""
Celery 설정 파일
Redis를 브로커로 사용하여 비동기 작업 처리
"""

from __future__ import annotations

import os

from celery import Celery
from celery.schedules import crontab

# Django 설정 모듈 지정
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "orderhub.settings")

# Celery 앱 생성
app = Celery("orderhub")

# Django 설정에서 CELERY_ 접두사가 붙은 설정 로드
app.config_from_object("django.conf:settings", namespace="CELERY")

# TESTING 환경에서는 Django settings의 broker 설정을 강제로 적용
# (app 생성 시점의 환경변수보다 Django settings 우선)
from django.conf import settings
if hasattr(settings, 'CELERY_BROKER_URL'):
    app.conf.broker_url = settings.CELERY_BROKER_URL
if hasattr(settings, 'CELERY_RESULT_BACKEND'):
    app.conf.result_backend = settings.CELERY_RESULT_BACKEND

# 등록된 Django 앱에서 tasks 자동 로드
app.autodiscover_tasks()

# Celery Beat 스케줄 설정
app.conf.beat_schedule = {
    # 만료된 거리 캐시 정리 - 매일 새벽 3시 30분
    "purge-expired-distance-cache": {
        "task": "delivery.tasks.cleanup_tasks.purge_expired_distance_cache_task",
        "schedule": crontab(hour=3, minute=30),  # 매일 03:30
        "options": {
            "expires": 3600,  # 1시간 후 만료
        },
    },
}


# Celery 설정
app.conf.update(
    # 작업 결과 만료 시간 (초)
    result_expires=3600,
    # 시간대 설정
    timezone="Europe/London",
    # 작업 직렬화 방식
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    # 작업 실행 옵션
    task_soft_time_limit=300,  # 5분
    task_time_limit=600,  # 10분
    # 워커 설정
    worker_max_tasks_per_child=1000,  # 메모리 누수 방지
    worker_prefetch_multiplier=4,
    # 큐 설정
    task_default_queue="default",
    task_queues={
        "default": {
            "exchange": "default",
            "exchange_type": "direct",
            "routing_key": "default",
        },
        "maintenance": {  # 정리 작업 전용 큐 (낮은 우선순위)
            "exchange": "maintenance",
            "exchange_type": "direct",
            "routing_key": "maintenance",
        },
    },
    # 라우팅 설정
    task_routes={
        "delivery.tasks.cleanup_tasks.*": {
            "queue": "maintenance",
            "routing_key": "maintenance",
        },
    },
)

# TESTING 환경에서 broker 설정 최종 강제 적용
# app.conf.update() 이후에도 환경변수가 덮어쓸 수 있으므로 마지막에 재적용
if hasattr(settings, 'TESTING') and settings.TESTING:
    if hasattr(settings, 'CELERY_BROKER_URL'):
        app.conf.broker_url = settings.CELERY_BROKER_URL
    if hasattr(settings, 'CELERY_RESULT_BACKEND'):
        app.conf.result_backend = settings.CELERY_RESULT_BACKEND


from celery.signals import task_failure
from celery.utils.log import get_task_logger

logger = get_task_logger(__name__)


@task_failure.connect
def task_failure_handler(sender, task_id, exception, **kwargs):
    """
    Log failed tasks
    """
    logger.error(f"Task failed: {sender.name}, task_id={task_id}, error={exception}")
