import logging

from django.contrib.auth.models import update_last_login
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from users import services as user_services
from .serializers import LoginSerializer, RegisterSerializer

logger = logging.getLogger("ffpoints")


def issue_session(user):
    """
    Tokens plus the convenience copy of the identity the client keeps locally.
    """
    user_services.bootstrap_admin(user)
    update_last_login(None, user)

    refresh = RefreshToken.for_user(user)
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
        "session": user_services.session_payload(user),
    }


class RegisterView(APIView):
    """
    POST /api/auth/register/
    Body: {"first_name", "last_name", "nickname", "password"}
    """
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        return Response(issue_session(user), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    POST /api/auth/login/
    Body: {"first_name", "last_name", "password"}
    """
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]

        logger.info(f"Login: {user.username}")
        return Response(issue_session(user), status=status.HTTP_200_OK)


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(user_services.session_payload(request.user))
