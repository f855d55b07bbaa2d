# core/supabase_auth.py
# Custom DRF authentication class to verify Supabase JWTs

import os
import logging
import jwt
from django.contrib.auth import get_user_model
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from core.constants import ROLE_STUDENT
from users.services import bootstrap_admin

logger = logging.getLogger("ffpoints")

User = get_user_model()


class SupabaseJWTAuthentication(BaseAuthentication):
    """
    Custom authentication class that validates Supabase JWTs.

    This authenticator:
    1. Extracts the JWT from the Authorization header
    2. Verifies the token signature using the Supabase JWT secret
    3. Looks up or creates a student profile for the Supabase user
    """

    def authenticate(self, request):
        auth_header = request.headers.get("Authorization", "")

        if not auth_header.startswith("Bearer "):
            return None  # Let other auth backends handle it

        token = auth_header.split(" ")[1]

        supabase_jwt_secret = os.environ.get("SUPABASE_JWT_SECRET")
        if not supabase_jwt_secret:
            return None  # Provider not configured; SimpleJWT tokens only

        try:
            # Supabase uses HS256 by default
            payload = jwt.decode(
                token,
                supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationFailed("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid Supabase token: {e}")
            return None  # Let other auth backends try

        if not payload.get("sub"):
            raise AuthenticationFailed("Invalid token: missing user ID")

        user = self._get_or_create_user(payload)
        return (user, payload)

    def authenticate_header(self, request):
        # Unauthenticated requests get 401 rather than 403
        return 'Bearer realm="api"'

    def _get_or_create_user(self, payload: dict):
        """
        Map a Supabase identity to a profile by email, creating a student
        on first sign-in.
        """
        email = payload.get("email")
        if not email:
            raise AuthenticationFailed("Token missing email claim")

        # Email is not unique on the profile; the oldest match wins
        user = User.objects.filter(email__iexact=email).order_by("id").first()
        if user is not None:
            return user

        metadata = payload.get("user_metadata") or {}
        username = base_username = email.split("@")[0]
        counter = 1
        while User.objects.filter(username=username).exists():
            username = f"{base_username}_{counter}"
            counter += 1

        user = User.objects.create(
            username=username,
            email=email,
            first_name=metadata.get("first_name", ""),
            last_name=metadata.get("last_name", ""),
            nickname=metadata.get("nickname", ""),
            role=ROLE_STUDENT,
            # Password is not used for Supabase auth
        )
        user.set_unusable_password()
        user.save(update_fields=["password"])
        logger.info(f"Created new user from Supabase: {email}")

        bootstrap_admin(user)
        return user
