from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Branch, DeliveryCharge, DistanceCache, PostcodeExclusion, PriceOverride, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """사용자 관리자 페이지 설정 (역할/소속 지점 추가)"""

    list_display = ["username", "email", "role", "branch", "is_active"]
    list_filter = ["role", "branch", "is_active", "is_staff"]
    search_fields = ["username", "email", "phone_number"]
    fieldsets = BaseUserAdmin.fieldsets + (("지점", {"fields": ("role", "branch", "phone_number")}),)


class DeliveryChargeInline(admin.TabularInline):
    model = DeliveryCharge
    extra = 0
    fields = ["max_distance", "min_spend", "max_spend", "charge", "is_active"]


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ["name", "city", "postal_code", "latitude", "longitude", "is_active"]
    list_filter = ["is_active", "city"]
    search_fields = ["name", "postal_code", "street"]
    readonly_fields = ["slug", "created_at", "updated_at"]
    inlines = [DeliveryChargeInline]


@admin.register(DeliveryCharge)
class DeliveryChargeAdmin(admin.ModelAdmin):
    list_display = ["branch", "max_distance", "min_spend", "max_spend", "charge", "is_active", "updated_at"]
    list_filter = ["branch", "is_active"]
    list_editable = ["is_active"]
    ordering = ["branch", "max_distance", "min_spend"]
    readonly_fields = ["created_by", "updated_by", "created_at", "updated_at"]


@admin.register(PriceOverride)
class PriceOverrideAdmin(admin.ModelAdmin):
    list_display = ["branch", "full_postcode", "min_spend", "charge", "is_active"]
    list_filter = ["branch", "is_active"]
    search_fields = ["prefix", "postfix"]
    readonly_fields = ["created_by", "updated_by", "created_at", "updated_at"]


@admin.register(PostcodeExclusion)
class PostcodeExclusionAdmin(admin.ModelAdmin):
    list_display = ["branch", "full_postcode", "reason", "is_active"]
    list_filter = ["branch", "is_active"]
    search_fields = ["prefix", "postfix", "reason"]
    readonly_fields = ["created_by", "updated_by", "created_at", "updated_at"]


@admin.register(DistanceCache)
class DistanceCacheAdmin(admin.ModelAdmin):
    """거리 캐시 (조회 전용)"""

    list_display = ["from_key", "to_key", "distance_meters", "source", "expires_at", "expired"]
    list_filter = ["source"]
    search_fields = ["from_key", "to_key"]
    date_hierarchy = "expires_at"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    @admin.display(boolean=True, description="만료 여부")
    def expired(self, obj):
        return obj.is_expired
