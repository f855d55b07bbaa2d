# users/views.py - Profile & admin point adjustments

import logging

from django.contrib.auth import get_user_model
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.constants import ROLE_STUDENT
from core.exceptions import StoreUnavailable
from core.responses import api_error
from gamification.engine import PointsEngine
from .permissions import IsAdminRole
from .serializers import PointsAdjustSerializer, StudentSerializer, UserSerializer

logger = logging.getLogger("ffpoints")

User = get_user_model()


class UserViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Standard User API.
    Admins can read any profile; everyone else only /me/.
    """
    queryset = User.objects.all()
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_permissions(self):
        if self.action == 'me':
            return [IsAuthenticated()]
        return super().get_permissions()

    @action(detail=False, methods=['get'])
    def me(self, request):
        """
        GET /api/users/me/
        Stored profile of the caller (authoritative, unlike the login session copy)
        """
        request.user.refresh_from_db()
        serializer = self.get_serializer(request.user)
        return Response(serializer.data)

    @action(detail=False, methods=['get'])
    def students(self, request):
        """
        GET /api/users/students/
        Students, highest points first
        """
        students = User.objects.filter(role=ROLE_STUDENT).order_by('-points', 'id')
        return Response(StudentSerializer(students, many=True).data)

    @action(detail=True, methods=['post'])
    def points(self, request, pk=None):
        """
        POST /api/users/{pk}/points/
        Body: {"delta": -5}
        Applies a signed delta; the response carries the stored balance.
        """
        serializer = PointsAdjustSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        delta = serializer.validated_data['delta']

        target = self.get_object()
        change = PointsEngine.change(User, target.pk, delta)

        if change.error == "not_found":
            return api_error("User not found", status.HTTP_404_NOT_FOUND)
        if not change.ok:
            raise StoreUnavailable()

        logger.info(f"{request.user.username} adjusted user {target.pk} by {delta:+d}")
        return Response({
            'id': target.pk,
            'delta': delta,
            'points': change.points,
        })
