from rest_framework.permissions import BasePermission

from .utils.constants import UserRole

BACK_OFFICE_ROLES = [
    UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.OWNER, UserRole.CALL_CENTER,
    UserRole.TICKET_OFFICE, UserRole.CHECKER, UserRole.DRIVER, UserRole.COMMISSIONER,
]
TRIP_MANAGER_ROLES = [UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.OWNER]
BOARDING_ROLES = [UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.OWNER, UserRole.CHECKER, UserRole.DRIVER]


def _role(user):
    profile = getattr(user, 'profile', None)
    return profile.role if profile else None


class IsBackOfficeUser(BasePermission):
    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and _role(request.user) in BACK_OFFICE_ROLES)


class IsTripManager(BasePermission):
    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and _role(request.user) in TRIP_MANAGER_ROLES)


class CanBoardPassengers(BasePermission):
    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and _role(request.user) in BOARDING_ROLES)
