"""
Custom permission classes wrapping the access control gate.

Usage:
    @permission_classes([CanEditOrReadOnly])
    class AreaViewSet(viewsets.ModelViewSet):
        ...
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

from apps.accounts.models import Role
from apps.accounts.services import require_active, require_role
from apps.common.exceptions import Unauthenticated


def _known_user(request):
    user = request.user
    if not user or not user.is_authenticated:
        raise Unauthenticated()
    return user


class IsActiveAppUser(BasePermission):
    """
    Permission: caller must resolve to an active AppUser.

    A verified identity without an AppUser row is authenticated at the
    provider but unknown here, which is a 403.
    """

    message = 'You do not have access to this application.'

    def has_permission(self, request, view):
        if request.auth is None:
            raise Unauthenticated()
        if not request.user.is_authenticated:
            return False
        require_active(request.user)
        return True


class CanEditOrReadOnly(IsActiveAppUser):
    """Permission: any active user may read; admins and editors may write."""

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False
        if request.method in SAFE_METHODS:
            return True
        require_role(_known_user(request), [Role.ADMIN, Role.EDITOR])
        return True


class IsAdminRole(IsActiveAppUser):
    """Permission: active admin only."""

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False
        require_role(_known_user(request), [Role.ADMIN])
        return True


class IsAdminOrReadOnly(IsActiveAppUser):
    """Permission: any active user may read; only admins may write."""

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False
        if request.method in SAFE_METHODS:
            return True
        require_role(_known_user(request), [Role.ADMIN])
        return True
