from __future__ import annotations

from django.db import models
from django.utils.text import slugify

from delivery.utils.distance import Coordinates


class Branch(models.Model):
    """
    지점(매장) 정보

    - 배달비 규칙(거리 구간, 우편번호 예외/제외)의 소유자
    - latitude/longitude가 모두 있어야 거리 기반 배달비 계산이 가능
    """

    name = models.CharField(max_length=100, unique=True, verbose_name="지점명")
    slug = models.SlugField(max_length=120, unique=True, blank=True)

    # 주소
    street = models.CharField(max_length=200, verbose_name="도로명 주소")
    city = models.CharField(max_length=100, verbose_name="도시")
    state = models.CharField(max_length=100, blank=True, default="", verbose_name="주/카운티")
    postal_code = models.CharField(max_length=10, verbose_name="우편번호")
    country = models.CharField(max_length=60, default="GB", verbose_name="국가")

    # 위치 (배달 거리 계산 기준점)
    latitude = models.FloatField(null=True, blank=True, verbose_name="위도")
    longitude = models.FloatField(null=True, blank=True, verbose_name="경도")
    formatted_address = models.CharField(max_length=255, blank=True, default="", verbose_name="표시 주소")

    phone = models.CharField(max_length=20, verbose_name="전화번호")
    email = models.EmailField(blank=True, default="", verbose_name="이메일")

    is_active = models.BooleanField(default=True, verbose_name="운영 여부")

    created_at = models.DateTimeField(auto_now_add=True, verbose_name="생성일시")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="수정일시")

    class Meta:
        db_table = "delivery_branches"
        verbose_name = "지점"
        verbose_name_plural = "지점 목록"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs) -> None:
        # 이름에서 slug 자동 생성
        self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    @property
    def coordinates(self) -> Coordinates | None:
        """지점 좌표 (미설정 시 None)"""
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(lat=self.latitude, lng=self.longitude)
