"""모델과 마이그레이션 일치 여부"""

from io import StringIO

import pytest
from django.core.management import call_command


@pytest.mark.django_db
def test_no_missing_migrations():
    """모델 변경 후 makemigrations를 빠뜨리면 실패 (--check는 변경 사항이 있으면 SystemExit)"""
    out = StringIO()

    call_command("makemigrations", "delivery", "--check", "--dry-run", stdout=out)

    assert "No changes detected" in out.getvalue()
