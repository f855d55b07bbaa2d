# ux/views/dashboard.py

from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.constants import VIEW_ADMIN
from users.permissions import is_admin
from ux.services.dashboard import get_student_dashboard


class UXDashboardView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        # Admins have their own view
        if is_admin(request.user):
            return Response({
                "meta": {"success": True},
                "redirect": VIEW_ADMIN,
                "data": None,
            })

        return Response({
            "meta": {"success": True},
            "data": get_student_dashboard(request.user),
        })
