# ux/views/admin.py

from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from users.permissions import IsAdminRole
from ux.services.admin import get_admin_overview


class UXAdminOverviewView(APIView):
    """
    Admin view load. The role gate runs before any admin data is read.
    """
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        return Response({
            "meta": {"success": True},
            "data": get_admin_overview(),
        })
