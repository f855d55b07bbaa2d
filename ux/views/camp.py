# ux/views/camp.py

from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from camps.services import camp_snapshot
from core.constants import VIEW_DASHBOARD
from core.exceptions import RoleRedirect
from users.permissions import can_manage_camp
from ux.services.dashboard import get_mentor_camp


class UXMentorCampView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        request.user.refresh_from_db()
        camp = get_mentor_camp(request.user)
        if camp is None or not can_manage_camp(request.user, camp):
            raise RoleRedirect(to=VIEW_DASHBOARD, detail="Not a camp mentor.")

        return Response({
            "meta": {"success": True},
            "data": camp_snapshot(camp),
        })
