import logging

from django.db import DatabaseError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.constants import VIEW_ADMIN
from core.exceptions import RoleRedirect, StoreUnavailable
from users.permissions import IsAdminRole, is_admin

from . import services
from .models import Activity
from .serializers import ActivitySerializer, CompletionSerializer

logger = logging.getLogger("ffpoints")


class ActivityListCreateView(APIView):
    """
    GET  /api/activities/ -> catalog, each with "completed" for the caller
    POST /api/activities/ -> create (admin)
    """
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), IsAdminRole()]
        return super().get_permissions()

    def get(self, request):
        activities = Activity.objects.all()
        context = {"completed_ids": services.completed_activity_ids(request.user)}
        return Response(ActivitySerializer(activities, many=True, context=context).data)

    def post(self, request):
        serializer = ActivitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            activity = serializer.save(created_by=request.user)
        except DatabaseError:
            logger.exception(f"Creating activity by {request.user.username} failed")
            raise StoreUnavailable()

        logger.info(f"Activity {activity.id} '{activity.name}' created by {request.user.username}")
        return Response(ActivitySerializer(activity).data, status=status.HTTP_201_CREATED)


class ActivityDetailView(APIView):
    """
    DELETE /api/activities/<activity_id>/ (admin)
    """
    permission_classes = [IsAuthenticated, IsAdminRole]

    def delete(self, request, activity_id):
        activity = get_object_or_404(Activity, pk=activity_id)
        try:
            activity.delete()
        except DatabaseError:
            logger.exception(f"Deleting activity {activity_id} failed")
            raise StoreUnavailable()
        logger.info(f"Activity {activity_id} deleted by {request.user.username}")
        return Response(status=status.HTTP_204_NO_CONTENT)


class CompleteActivityView(APIView):
    """
    POST /api/activities/<activity_id>/complete/
    Credits the activity's points once; repeats answer 409.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, activity_id):
        if is_admin(request.user):
            raise RoleRedirect(to=VIEW_ADMIN, detail="Admins do not complete activities.")

        activity = get_object_or_404(Activity, pk=activity_id)
        result = services.complete_activity(request.user, activity)

        return Response({
            "message": "Activity completed",
            "completion": CompletionSerializer(result.completion).data,
            "points": result.points,
        }, status=status.HTTP_201_CREATED)


class CompletionHistoryView(APIView):
    """
    GET /api/activities/history/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        completions, total = services.completion_history(request.user)
        return Response({
            "total_points_earned": total,
            "count": len(completions),
            "completions": CompletionSerializer(completions, many=True).data,
        })
