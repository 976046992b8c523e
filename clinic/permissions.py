"""
Role based permission classes.

Each dashboard is gated by the role stored on :class:`clinic.models.User`.
Inactive accounts never pass, whatever their role.
"""
from django.conf import settings
from rest_framework.permissions import BasePermission

from .choices import Role


def _user_role(request):
    user = getattr(request, "user", None)
    if not (user and user.is_authenticated and user.is_active):
        return None
    return getattr(user, "role", None)


class RolePermission(BasePermission):
    """Allow access only to users whose role is in ``allowed_roles``."""
    allowed_roles: tuple[str, ...] = ()

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _user_role(request) in self.allowed_roles


class IsAdminRole(RolePermission):
    """Hospital administrators."""
    allowed_roles = (Role.ADMIN,)


class IsDoctorRole(RolePermission):
    allowed_roles = (Role.DOCTOR,)


class IsNurseRole(RolePermission):
    allowed_roles = (Role.NURSE,)


class IsFrontDeskRole(RolePermission):
    """Receptionists and general staff run admissions and discharges."""
    allowed_roles = (Role.RECEPTIONIST, Role.STAFF)


class IsBedStaff(BasePermission):
    """Roles that may change a bed's status directly."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _user_role(request) in settings.BED_STATUS_ROLES
