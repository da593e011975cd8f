# 지점 관리자 권한 관련 커스텀 권한 클래스를 정의합니다.

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rest_framework import permissions

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.views import APIView


class IsBranchManager(permissions.BasePermission):
    """
    지점 관리 권한 체크

    - 인증된 관리 역할(superadmin/admin/manager/staff) 사용자만 허용
    - 배달비 규칙 관리, 지점 위치 조회에 사용

    사용 예시:
        permission_classes = [IsBranchManager]
    """

    message = "Only admin users can manage delivery charges"

    def has_permission(self, request: Request, view: APIView) -> bool:
        if not request.user or not request.user.is_authenticated:
            return False
        return request.user.is_management


class IsAssignedToBranch(permissions.BasePermission):
    """
    지점이 배정된 사용자인지 체크

    배달비 규칙은 모두 request.user.branch 기준으로 조회/생성되므로
    IsBranchManager와 함께 사용합니다.
    """

    message = "User must be assigned to a branch"

    def has_permission(self, request: Request, view: APIView) -> bool:
        return getattr(request.user, "branch_id", None) is not None

    def has_object_permission(self, request: Request, view: APIView, obj: Any) -> bool:
        return obj.branch_id == request.user.branch_id
