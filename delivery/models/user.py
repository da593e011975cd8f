from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth.models import AbstractUser
from django.db import models

if TYPE_CHECKING:
    from delivery.models.branch import Branch


class User(AbstractUser):
    """
    커스텀 User 모델
    AbstractUser를 상속받아 기본 필드들(username, email, password 등)을 모두 포함하고,
    지점 관리에 필요한 역할/소속 지점 필드를 추가합니다.
    """

    ROLE_SUPERADMIN = "superadmin"
    ROLE_ADMIN = "admin"
    ROLE_MANAGER = "manager"
    ROLE_STAFF = "staff"
    ROLE_USER = "user"

    ROLE_CHOICES = [
        (ROLE_SUPERADMIN, "Super admin"),
        (ROLE_ADMIN, "Admin"),
        (ROLE_MANAGER, "Manager"),
        (ROLE_STAFF, "Staff"),
        (ROLE_USER, "Customer"),
    ]

    # 지점 관리(배달비 설정 등)가 가능한 역할
    MANAGEMENT_ROLES = (ROLE_SUPERADMIN, ROLE_ADMIN, ROLE_MANAGER, ROLE_STAFF)

    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default=ROLE_USER,
        verbose_name="역할",
    )

    # 소속 지점 (지점이 삭제되어도 계정은 유지)
    branch = models.ForeignKey(
        "delivery.Branch",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="staff_members",
        verbose_name="소속 지점",
    )

    phone_number = models.CharField(max_length=20, blank=True, verbose_name="전화번호")

    class Meta:
        db_table = "delivery_users"
        verbose_name = "사용자"
        verbose_name_plural = "사용자 목록"

    def __str__(self) -> str:
        return self.username

    @property
    def is_management(self) -> bool:
        """지점 관리 권한 여부"""
        return self.role in self.MANAGEMENT_ROLES
