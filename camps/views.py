from django.db.models import Count
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import StoreUnavailable
from core.responses import api_error
from users.permissions import IsAdminRole, IsCampManager

from . import services
from .models import Camp, CampKid
from .serializers import (
    CampCreateSerializer,
    CampKidSerializer,
    CampSerializer,
    PointsDeltaSerializer,
)


class CampScopedMixin:
    """Resolves <camp_id> and runs the camp object permission."""

    def get_camp(self):
        camp = get_object_or_404(Camp, pk=self.kwargs["camp_id"])
        self.check_object_permissions(self.request, camp)
        return camp


class CampListCreateView(APIView):
    """
    GET  /api/camps/  -> all camps (admin)
    POST /api/camps/  -> {"name": ..., "mentor_ids": [...]}
    """
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        camps = Camp.objects.annotate(kids_count=Count("kids")).prefetch_related("mentors")
        return Response(CampSerializer(camps, many=True).data)

    def post(self, request):
        serializer = CampCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        camp = services.create_camp(
            name=serializer.validated_data["name"],
            mentor_ids=serializer.validated_data["mentor_ids"],
            created_by=request.user,
        )
        camp = Camp.objects.annotate(kids_count=Count("kids")).get(pk=camp.pk)
        return Response(CampSerializer(camp).data, status=status.HTTP_201_CREATED)


class CampDetailView(CampScopedMixin, APIView):
    """
    GET /api/camps/<camp_id>/ -> camp, ranked kids, group summary
    """
    permission_classes = [IsAuthenticated, IsCampManager]

    def get(self, request, camp_id):
        camp = self.get_camp()
        return Response(services.camp_snapshot(camp))


class CampKidListCreateView(CampScopedMixin, APIView):
    """
    GET  /api/camps/<camp_id>/kids/ -> kids, highest points first
    POST /api/camps/<camp_id>/kids/ -> enrol a kid (admin only)
    """
    permission_classes = [IsAuthenticated, IsCampManager]

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), IsAdminRole()]
        return super().get_permissions()

    def get(self, request, camp_id):
        camp = self.get_camp()
        roster = services.load_roster(camp)
        return Response(services.ranked(roster.ordered()))

    def post(self, request, camp_id):
        camp = get_object_or_404(Camp, pk=camp_id)

        serializer = CampKidSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        kid = services.enrol_kid(camp, **serializer.validated_data)
        return Response(CampKidSerializer(kid).data, status=status.HTTP_201_CREATED)


class CampKidPointsView(CampScopedMixin, APIView):
    """
    POST /api/camps/<camp_id>/kids/<kid_id>/points/
    Body: {"delta": 5}
    """
    permission_classes = [IsAuthenticated, IsCampManager]

    def post(self, request, camp_id, kid_id):
        camp = self.get_camp()
        kid = get_object_or_404(CampKid, pk=kid_id, camp=camp)

        serializer = PointsDeltaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        delta = serializer.validated_data["delta"]

        change, roster = services.change_kid_points(kid, delta)
        if change.error == "not_found":
            return api_error("Kid not found", status.HTTP_404_NOT_FOUND)
        if not change.ok:
            raise StoreUnavailable()

        return Response({
            "kid": roster.get(kid.id),
            "delta": delta,
            "kids": services.ranked(roster.ordered()),
        })


class CampGroupsView(CampScopedMixin, APIView):
    """
    GET /api/camps/<camp_id>/groups/ -> group numbers + count/total/average
    """
    permission_classes = [IsAuthenticated, IsCampManager]

    def get(self, request, camp_id):
        camp = self.get_camp()
        kids = services.load_roster(camp).ordered()
        return Response({
            "group_numbers": services.group_numbers(kids),
            "groups": services.group_summary(kids),
        })


class CampGroupPointsView(CampScopedMixin, APIView):
    """
    POST /api/camps/<camp_id>/groups/<group_number>/points/
    Body: {"delta": 10}

    One increment per kid, no rollback: on partial failure the response
    lists which kids were updated and which were not.
    """
    permission_classes = [IsAuthenticated, IsCampManager]

    def post(self, request, camp_id, group_number):
        camp = self.get_camp()

        serializer = PointsDeltaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        delta = serializer.validated_data["delta"]

        result, roster = services.award_group(camp, group_number, delta)
        if result is None:
            return api_error("No kids in this group", status.HTTP_404_NOT_FOUND)

        body = {
            "group_number": group_number,
            "delta": delta,
            "updated_ids": [change.record_id for change in result.updated],
            "failed_ids": [change.record_id for change in result.failed],
            "kids": services.ranked(roster.ordered()),
        }

        if result.failed:
            body["error"] = (
                f"Updated {len(result.updated)} of {len(result.changes)} kids; "
                "the rest were not changed."
            )
            return Response(body, status=status.HTTP_207_MULTI_STATUS)

        return Response(body)
