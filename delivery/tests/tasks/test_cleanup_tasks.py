"""거리 캐시 정리 태스크/커맨드 테스트"""

from io import StringIO

import pytest
from django.core.management import call_command
from django.db import DatabaseError

from delivery.models import DistanceCache
from delivery.tasks import purge_expired_distance_cache_task
from delivery.tests.factories import DistanceCacheFactory


@pytest.mark.django_db
class TestPurgeExpiredDistanceCacheTask:
    def test_deletes_only_expired(self):
        # Arrange
        valid = DistanceCacheFactory()
        DistanceCacheFactory.expired(to_lat=51.52)

        # Act
        result = purge_expired_distance_cache_task()

        # Assert
        assert result["success"] is True
        assert result["deleted_count"] == 1
        assert list(DistanceCache.objects.all()) == [valid]

    def test_grace_hours_keeps_recently_expired(self):
        DistanceCacheFactory.expired(hours_ago=2)
        DistanceCacheFactory.expired(hours_ago=10, to_lat=51.52)

        result = purge_expired_distance_cache_task(grace_hours=5)

        assert result["deleted_count"] == 1
        assert DistanceCache.objects.count() == 1

    def test_nothing_to_delete(self):
        DistanceCacheFactory()

        result = purge_expired_distance_cache_task()

        assert result["deleted_count"] == 0

    def test_database_error_reported(self, mocker):
        mocker.patch.object(DistanceCache.objects, "expired_before", side_effect=DatabaseError("db down"))

        result = purge_expired_distance_cache_task()

        assert result == {"success": False, "message": "db down"}


@pytest.mark.django_db
class TestPurgeDistanceCacheCommand:
    def test_dry_run_keeps_rows(self):
        DistanceCacheFactory.expired()
        out = StringIO()

        call_command("purge_distance_cache", "--dry-run", stdout=out)

        assert "삭제 대상: 1개" in out.getvalue()
        assert DistanceCache.objects.count() == 1

    def test_purge(self):
        DistanceCacheFactory.expired()
        DistanceCacheFactory(to_lat=51.52)
        out = StringIO()

        call_command("purge_distance_cache", stdout=out)

        assert "삭제 완료: 1개" in out.getvalue()
        assert DistanceCache.objects.count() == 1
