import logging

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.http import HttpResponse
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from core.constants import POINT_METHOD_QR_SCAN
from core.exceptions import StoreUnavailable
from core.responses import api_error
from gamification.engine import PointsEngine
from gamification.models import PointLog
from users.permissions import IsAdminRole

from . import camera, codec
from .serializers import CameraErrorSerializer, ScanAwardSerializer, ScanSerializer

logger = logging.getLogger("ffpoints")

User = get_user_model()


def build_student_data(user, points=None):
    return {
        "student_id": user.id,
        "student_name": f"{user.first_name} {user.last_name}".strip() or user.username,
        "nickname": user.nickname,
        "username": user.username,
        "points": user.points if points is None else points,
    }


def resolve_scanned(payload):
    """
    Returns (student, None) or (None, error_response).
    A miss keeps the operator's scanner running.
    """
    try:
        key = codec.decode_payload(payload)
        return codec.resolve_student(key), None
    except codec.InvalidPayload:
        return None, api_error("Invalid QR code", status.HTTP_400_BAD_REQUEST, continue_scanning=True)
    except codec.StudentNotFound:
        logger.info(f"Scanned payload matched no student: {payload[:64]!r}")
        return None, api_error("Student not found", status.HTTP_404_NOT_FOUND, continue_scanning=True)


class ScanLookupView(APIView):
    """
    POST /api/scan/lookup/
    Body: {"payload": "<scanned text>"}
    Preview who a scanned code belongs to before awarding.
    """
    permission_classes = [IsAuthenticated, IsAdminRole]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "qr-scan"

    def post(self, request):
        serializer = ScanSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        student, error = resolve_scanned(serializer.validated_data["payload"])
        if error:
            return error

        return Response(build_student_data(student))


class ScanAwardView(APIView):
    """
    POST /api/scan/award/
    Body: {"payload": "<scanned text>", "points": 10}

    Increments the student's own points (never camp kid points) and writes
    a PointLog entry tagged qr_scan.
    """
    permission_classes = [IsAuthenticated, IsAdminRole]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "qr-scan"

    def post(self, request):
        serializer = ScanAwardSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        delta = serializer.validated_data["points"]

        student, error = resolve_scanned(serializer.validated_data["payload"])
        if error:
            return error

        scanner = request.user
        student_data = build_student_data(student)

        try:
            with transaction.atomic():
                points = PointsEngine.apply_delta(User, student.pk, delta)
                log = PointLog.objects.create(
                    student=student,
                    student_name=student_data["student_name"],
                    points=delta,
                    method=POINT_METHOD_QR_SCAN,
                    admin=scanner,
                    admin_name=f"{scanner.first_name} {scanner.last_name}".strip() or scanner.username,
                )
        except DatabaseError:
            logger.exception(f"QR award to user {student.pk} failed")
            raise StoreUnavailable()

        return Response({
            "action": "award",
            "message": f"{delta:+d} points for {student_data['student_name']}",
            "scanned_by": scanner.username,
            "log_id": log.id,
            "delta": delta,
            **build_student_data(student, points=points),
        }, status=status.HTTP_200_OK)


class MyQRPayloadView(APIView):
    """
    GET /api/scan/me/
    The text the caller's QR code carries.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({
            "payload": codec.identity_payload_for(request.user),
            "student_id": request.user.id,
        })


class MyQRImageView(APIView):
    """
    GET /api/scan/me/qr.png
    """
    permission_classes = [IsAuthenticated]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "qr-image"

    def get(self, request):
        png = codec.render_png(codec.identity_payload_for(request.user))

        response = HttpResponse(png, content_type="image/png")
        response["Cache-Control"] = "no-store"
        return response


class CameraErrorView(APIView):
    """
    POST /api/scan/camera-error/
    Body: {"error": "NotAllowedError", "user_agent": "..."}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CameraErrorSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user_agent = serializer.validated_data.get("user_agent") or request.headers.get("User-Agent", "")
        described = camera.describe_camera_error(serializer.validated_data["error"], user_agent)

        logger.info(f"Camera error from {request.user.username}: {described['condition']}")
        return Response(described)
