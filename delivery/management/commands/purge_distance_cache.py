"""
만료된 거리 캐시 정리 Management Command

Celery beat 없이 cron으로 실행할 때 사용합니다.
"""

from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from delivery.models import DistanceCache


class Command(BaseCommand):
    help = "만료된 거리 캐시를 삭제합니다"

    def add_arguments(self, parser):
        parser.add_argument(
            "--grace-hours",
            type=int,
            default=0,
            help="만료 후 추가 보관 시간 (기본: 0시간)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="실제 삭제하지 않고 삭제 대상 수만 출력",
        )

    def handle(self, *args, **options):
        grace_hours = options["grace_hours"]
        dry_run = options["dry_run"]
        cutoff = timezone.now() - timedelta(hours=grace_hours)

        queryset = DistanceCache.objects.expired_before(cutoff)
        target_count = queryset.count()

        self.stdout.write(self.style.WARNING(f"=== 거리 캐시 정리 {'(DRY RUN)' if dry_run else ''} ==="))
        self.stdout.write(f"기준 시각: {cutoff.strftime('%Y-%m-%d %H:%M:%S')}")
        self.stdout.write(f"삭제 대상: {target_count}개")

        if dry_run:
            self.stdout.write(self.style.NOTICE("DRY RUN 모드: 삭제하지 않았습니다."))
            return

        deleted_count, _ = queryset.delete()
        self.stdout.write(self.style.SUCCESS(f"삭제 완료: {deleted_count}개"))
