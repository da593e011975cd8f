import decimal

import django.contrib.auth.models
import django.contrib.auth.validators
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="Branch",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True, verbose_name="지점명")),
                ("slug", models.SlugField(blank=True, max_length=120, unique=True)),
                ("street", models.CharField(max_length=200, verbose_name="도로명 주소")),
                ("city", models.CharField(max_length=100, verbose_name="도시")),
                ("state", models.CharField(blank=True, default="", max_length=100, verbose_name="주/카운티")),
                ("postal_code", models.CharField(max_length=10, verbose_name="우편번호")),
                ("country", models.CharField(default="GB", max_length=60, verbose_name="국가")),
                ("latitude", models.FloatField(blank=True, null=True, verbose_name="위도")),
                ("longitude", models.FloatField(blank=True, null=True, verbose_name="경도")),
                ("formatted_address", models.CharField(blank=True, default="", max_length=255, verbose_name="표시 주소")),
                ("phone", models.CharField(max_length=20, verbose_name="전화번호")),
                ("email", models.EmailField(blank=True, default="", max_length=254, verbose_name="이메일")),
                ("is_active", models.BooleanField(default=True, verbose_name="운영 여부")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="생성일시")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="수정일시")),
            ],
            options={
                "verbose_name": "지점",
                "verbose_name_plural": "지점 목록",
                "db_table": "delivery_branches",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                (
                    "username",
                    models.CharField(
                        error_messages={"unique": "A user with that username already exists."},
                        help_text="Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.",
                        max_length=150,
                        unique=True,
                        validators=[django.contrib.auth.validators.UnicodeUsernameValidator()],
                        verbose_name="username",
                    ),
                ),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="email address")),
                (
                    "is_staff",
                    models.BooleanField(
                        default=False,
                        help_text="Designates whether the user can log into this admin site.",
                        verbose_name="staff status",
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        default=True,
                        help_text=(
                            "Designates whether this user should be treated as active. "
                            "Unselect this instead of deleting accounts."
                        ),
                        verbose_name="active",
                    ),
                ),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("superadmin", "Super admin"),
                            ("admin", "Admin"),
                            ("manager", "Manager"),
                            ("staff", "Staff"),
                            ("user", "Customer"),
                        ],
                        default="user",
                        max_length=20,
                        verbose_name="역할",
                    ),
                ),
                ("phone_number", models.CharField(blank=True, max_length=20, verbose_name="전화번호")),
                (
                    "branch",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="staff_members",
                        to="delivery.branch",
                        verbose_name="소속 지점",
                    ),
                ),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text=(
                            "The groups this user belongs to. A user will get all permissions "
                            "granted to each of their groups."
                        ),
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "verbose_name": "사용자",
                "verbose_name_plural": "사용자 목록",
                "db_table": "delivery_users",
            },
            managers=[
                ("objects", django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name="DeliveryCharge",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "max_distance",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=8,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))],
                        verbose_name="최대 거리(마일)",
                    ),
                ),
                (
                    "min_spend",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0"),
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))],
                        verbose_name="최소 주문금액",
                    ),
                ),
                (
                    "max_spend",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0"),
                        help_text="0이면 상한 없음",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))],
                        verbose_name="최대 주문금액",
                    ),
                ),
                (
                    "charge",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))],
                        verbose_name="배달비",
                    ),
                ),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="활성 여부")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="생성일시")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="수정일시")),
                (
                    "branch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="delivery_charges",
                        to="delivery.branch",
                        verbose_name="지점",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="생성자",
                    ),
                ),
                (
                    "updated_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="수정자",
                    ),
                ),
            ],
            options={
                "verbose_name": "거리별 배달비",
                "verbose_name_plural": "거리별 배달비 목록",
                "db_table": "delivery_charges",
                "ordering": ["max_distance", "-created_at"],
                "indexes": [
                    models.Index(fields=["branch", "max_distance"], name="charge_branch_distance"),
                    models.Index(fields=["branch", "is_active"], name="charge_branch_active"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PriceOverride",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("prefix", models.CharField(max_length=8, verbose_name="우편번호 앞자리")),
                ("postfix", models.CharField(blank=True, default="", max_length=4, verbose_name="우편번호 뒷자리")),
                ("is_active", models.BooleanField(default=True, verbose_name="활성 여부")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="생성일시")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="수정일시")),
                (
                    "min_spend",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0"),
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))],
                        verbose_name="최소 주문금액",
                    ),
                ),
                (
                    "charge",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))],
                        verbose_name="고정 배달비",
                    ),
                ),
                (
                    "branch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="%(class)ss",
                        to="delivery.branch",
                        verbose_name="지점",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="생성자",
                    ),
                ),
                (
                    "updated_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="수정자",
                    ),
                ),
            ],
            options={
                "verbose_name": "우편번호 배달비 예외",
                "verbose_name_plural": "우편번호 배달비 예외 목록",
                "db_table": "delivery_price_overrides",
                "ordering": ["prefix", "postfix", "-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["branch", "is_active"], name="price_override_branch_active"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("branch", "prefix", "postfix"),
                        name="unique_price_override_postcode",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PostcodeExclusion",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("prefix", models.CharField(max_length=8, verbose_name="우편번호 앞자리")),
                ("postfix", models.CharField(blank=True, default="", max_length=4, verbose_name="우편번호 뒷자리")),
                ("is_active", models.BooleanField(default=True, verbose_name="활성 여부")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="생성일시")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="수정일시")),
                (
                    "reason",
                    models.CharField(blank=True, default="Area not served", max_length=200, verbose_name="제외 사유"),
                ),
                (
                    "branch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="%(class)ss",
                        to="delivery.branch",
                        verbose_name="지점",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="생성자",
                    ),
                ),
                (
                    "updated_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="수정자",
                    ),
                ),
            ],
            options={
                "verbose_name": "배달 제외 우편번호",
                "verbose_name_plural": "배달 제외 우편번호 목록",
                "db_table": "delivery_postcode_exclusions",
                "ordering": ["prefix", "postfix", "-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["branch", "is_active"], name="exclusion_branch_active"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("branch", "prefix", "postfix"),
                        name="unique_postcode_exclusion",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="DistanceCache",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("from_lat", models.FloatField(verbose_name="출발 위도")),
                ("from_lng", models.FloatField(verbose_name="출발 경도")),
                ("to_lat", models.FloatField(verbose_name="도착 위도")),
                ("to_lng", models.FloatField(verbose_name="도착 경도")),
                ("from_key", models.CharField(max_length=32, verbose_name="출발 키")),
                ("to_key", models.CharField(max_length=32, verbose_name="도착 키")),
                ("distance_meters", models.FloatField(verbose_name="거리(m)")),
                (
                    "source",
                    models.CharField(
                        choices=[
                            ("google", "Google Distance Matrix"),
                            ("manual", "직선거리 계산"),
                            ("cache", "캐시"),
                        ],
                        default="google",
                        max_length=10,
                        verbose_name="출처",
                    ),
                ),
                ("expires_at", models.DateTimeField(db_index=True, verbose_name="만료일시")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="생성일시")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="수정일시")),
            ],
            options={
                "verbose_name": "거리 캐시",
                "verbose_name_plural": "거리 캐시 목록",
                "db_table": "delivery_distance_cache",
                "constraints": [
                    models.UniqueConstraint(fields=("from_key", "to_key"), name="unique_distance_cache_pair"),
                ],
            },
        ),
    ]
