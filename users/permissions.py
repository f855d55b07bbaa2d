from rest_framework.permissions import BasePermission

from core.constants import ROLE_ADMIN, VIEW_DASHBOARD
from core.exceptions import RoleRedirect


# ---- Helper functions -------------------------------------------------


def stored_role(user):
    """
    Role as currently stored, never the copy carried by a token or session.
    """
    if not user or not user.is_authenticated:
        return None
    user.refresh_from_db(fields=["role", "camp_mentor", "camp"])
    return user.role


def is_admin(user) -> bool:
    return stored_role(user) == ROLE_ADMIN


def can_manage_camp(user, camp) -> bool:
    """
    Admins manage every camp; a mentor manages only the camp they are flagged for.
    """
    if camp is None:
        return False

    role = stored_role(user)
    if role is None:
        return False
    if role == ROLE_ADMIN:
        return True

    return bool(user.camp_mentor and user.camp_id == camp.id)


# ---- Permission classes -----------------------------------------------


class IsAdminRole(BasePermission):
    """
    Admin-only views and mutations.
    Non-admins are sent back to the student dashboard before the view runs.
    """

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        if not is_admin(request.user):
            raise RoleRedirect(to=VIEW_DASHBOARD, detail="Admin access required.")

        return True


class IsCampManager(BasePermission):
    """
    For camp-scoped endpoints:
    - Admins: any camp.
    - Mentors: only when camp_mentor is set and camp_id matches.
    """

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        camp = getattr(obj, "camp", obj)
        if not can_manage_camp(request.user, camp):
            raise RoleRedirect(to=VIEW_DASHBOARD, detail="Not a manager of this camp.")
        return True
