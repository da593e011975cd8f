from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from delivery.utils.distance import Distance
from delivery.utils.postcode import normalize_postcode, split_postcode


class DeliveryChargeQuerySet(models.QuerySet):
    def for_branch(self, branch) -> DeliveryChargeQuerySet:
        return self.filter(branch=branch)

    def active(self) -> DeliveryChargeQuerySet:
        return self.filter(is_active=True)

    def in_lookup_order(self) -> DeliveryChargeQuerySet:
        """배달비 조회 순서: 가까운 구간 → 낮은 최소주문금액 → 먼저 생성된 규칙"""
        return self.order_by("max_distance", "min_spend", "id")


class DeliveryCharge(models.Model):
    """
    거리 구간별 배달비

    - max_distance: 이 구간의 최대 거리 (마일, 관리자 입력값)
    - min_spend ~ max_spend: 주문금액 범위 (max_spend = 0 이면 상한 없음)
    - 같은 max_distance를 가진 규칙들이 하나의 거리 구간(tier)을 이룸
    """

    branch = models.ForeignKey(
        "delivery.Branch",
        on_delete=models.CASCADE,
        related_name="delivery_charges",
        verbose_name="지점",
    )

    max_distance = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name="최대 거리(마일)",
    )

    min_spend = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name="최소 주문금액",
    )

    max_spend = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name="최대 주문금액",
        help_text="0이면 상한 없음",
    )

    charge = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name="배달비",
    )

    is_active = models.BooleanField(default=True, db_index=True, verbose_name="활성 여부")

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="생성자",
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="수정자",
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name="생성일시")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="수정일시")

    objects = DeliveryChargeQuerySet.as_manager()

    class Meta:
        db_table = "delivery_charges"
        verbose_name = "거리별 배달비"
        verbose_name_plural = "거리별 배달비 목록"
        ordering = ["max_distance", "-created_at"]
        indexes = [
            models.Index(fields=["branch", "max_distance"], name="charge_branch_distance"),
            models.Index(fields=["branch", "is_active"], name="charge_branch_active"),
        ]

    def __str__(self) -> str:
        upper = f"£{self.max_spend}" if self.max_spend else "no limit"
        return f"{self.branch_id}: ≤{self.max_distance}mi, £{self.min_spend}-{upper} → £{self.charge}"

    @property
    def max_distance_value(self) -> Distance:
        return Distance.from_miles(self.max_distance)

    @property
    def has_spend_limit(self) -> bool:
        return self.max_spend > 0

    def covers_spend(self, order_total: Decimal) -> bool:
        """주문금액이 이 규칙의 금액 범위 안에 있는지"""
        if order_total < self.min_spend:
            return False
        return not self.has_spend_limit or order_total <= self.max_spend

    def spend_overlaps(self, other: DeliveryCharge) -> bool:
        """두 규칙의 주문금액 범위가 겹치는지 (상한 0 = 무한대)"""
        self_upper = self.max_spend if self.has_spend_limit else None
        other_upper = other.max_spend if other.has_spend_limit else None
        starts_before_other_ends = other_upper is None or self.min_spend <= other_upper
        other_starts_before_self_ends = self_upper is None or other.min_spend <= self_upper
        return starts_before_other_ends and other_starts_before_self_ends


class PostcodeRuleQuerySet(models.QuerySet):
    def match(self, branch, postcode: str):
        """
        우편번호에 해당하는 활성 규칙 조회

        1. prefix + postfix 정확히 일치하는 규칙
        2. 없으면 prefix만 등록된(postfix 빈 값) 지역 단위 규칙
        """
        prefix, postfix = split_postcode(postcode)
        if not prefix:
            return None

        candidates = self.filter(branch=branch, is_active=True, prefix=prefix)
        rule = candidates.filter(postfix=postfix).first()
        if rule is None and postfix:
            rule = candidates.filter(postfix="").first()
        return rule


class PostcodeRule(models.Model):
    """우편번호 규칙 공통 필드 (prefix = outward code, postfix = inward code)"""

    branch = models.ForeignKey(
        "delivery.Branch",
        on_delete=models.CASCADE,
        related_name="%(class)ss",
        verbose_name="지점",
    )

    prefix = models.CharField(max_length=8, verbose_name="우편번호 앞자리")
    postfix = models.CharField(max_length=4, blank=True, default="", verbose_name="우편번호 뒷자리")

    is_active = models.BooleanField(default=True, verbose_name="활성 여부")

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="생성자",
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="수정자",
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name="생성일시")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="수정일시")

    objects = PostcodeRuleQuerySet.as_manager()

    class Meta:
        abstract = True
        ordering = ["prefix", "postfix", "-created_at"]

    def __str__(self) -> str:
        return f"{self.branch_id}: {self.full_postcode}"

    def save(self, *args, **kwargs) -> None:
        # "SW1A 1AA"처럼 prefix에 전체 우편번호가 들어오면 분리 (prefix에는 outward code만 저장)
        prefix, inward = split_postcode(self.prefix)
        self.prefix = prefix
        self.postfix = normalize_postcode(self.postfix) or inward
        super().save(*args, **kwargs)

    @property
    def full_postcode(self) -> str:
        return f"{self.prefix} {self.postfix}" if self.postfix else self.prefix


class PriceOverride(PostcodeRule):
    """
    우편번호별 고정 배달비

    주문금액이 min_spend 이상일 때만 적용되며,
    미달이면 거리 기반 배달비로 넘어갑니다 (주문 거절 아님).
    """

    min_spend = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name="최소 주문금액",
    )

    charge = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name="고정 배달비",
    )

    class Meta(PostcodeRule.Meta):
        db_table = "delivery_price_overrides"
        verbose_name = "우편번호 배달비 예외"
        verbose_name_plural = "우편번호 배달비 예외 목록"
        constraints = [
            models.UniqueConstraint(
                fields=["branch", "prefix", "postfix"],
                name="unique_price_override_postcode",
            ),
        ]
        indexes = [
            models.Index(fields=["branch", "is_active"], name="price_override_branch_active"),
        ]

    def applies_to(self, order_total: Decimal) -> bool:
        return order_total >= self.min_spend


class PostcodeExclusion(PostcodeRule):
    """배달 불가 우편번호 (다른 모든 규칙보다 우선)"""

    DEFAULT_REASON = "Area not served"

    reason = models.CharField(max_length=200, default=DEFAULT_REASON, blank=True, verbose_name="제외 사유")

    class Meta(PostcodeRule.Meta):
        db_table = "delivery_postcode_exclusions"
        verbose_name = "배달 제외 우편번호"
        verbose_name_plural = "배달 제외 우편번호 목록"
        constraints = [
            models.UniqueConstraint(
                fields=["branch", "prefix", "postfix"],
                name="unique_postcode_exclusion",
            ),
        ]
        indexes = [
            models.Index(fields=["branch", "is_active"], name="exclusion_branch_active"),
        ]
