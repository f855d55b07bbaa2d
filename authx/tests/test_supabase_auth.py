import time
from unittest import mock

import jwt
from django.test import TestCase
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.test import APIRequestFactory

from core.supabase_auth import SupabaseJWTAuthentication
from users.models import User

SECRET = "test-supabase-secret"


def make_token(secret=SECRET, **claims):
    payload = {
        "sub": "supabase-uid-1",
        "aud": "authenticated",
        "email": "somsri@example.com",
        "exp": int(time.time()) + 3600,
        "user_metadata": {"first_name": "Somsri", "last_name": "Jaidee", "nickname": "Som"},
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


@mock.patch.dict("os.environ", {"SUPABASE_JWT_SECRET": SECRET})
class SupabaseJWTAuthenticationTestCase(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.auth = SupabaseJWTAuthentication()

    def request_with(self, token):
        return self.factory.get("/api/auth/me/", HTTP_AUTHORIZATION=f"Bearer {token}")

    def test_first_sign_in_creates_student(self):
        user, payload = self.auth.authenticate(self.request_with(make_token()))

        self.assertEqual(user.email, "somsri@example.com")
        self.assertEqual(user.role, "student")
        self.assertEqual(user.nickname, "Som")
        self.assertFalse(user.has_usable_password())
        self.assertEqual(payload["sub"], "supabase-uid-1")

    def test_existing_profile_is_reused(self):
        existing = User.objects.create_user(username="somsri", email="somsri@example.com", password="x" * 8)
        user, _ = self.auth.authenticate(self.request_with(make_token()))
        self.assertEqual(user.pk, existing.pk)
        self.assertEqual(User.objects.count(), 1)

    def test_shared_email_picks_oldest_profile(self):
        first = User.objects.create_user(username="somsri", email="Somsri@Example.com")
        User.objects.create_user(username="somsri2", email="somsri@example.com")

        user, _ = self.auth.authenticate(self.request_with(make_token()))
        self.assertEqual(user.pk, first.pk)
        self.assertEqual(User.objects.count(), 2)

    def test_expired_token_rejected(self):
        with self.assertRaises(AuthenticationFailed):
            self.auth.authenticate(self.request_with(make_token(exp=int(time.time()) - 10)))

    def test_foreign_token_falls_through(self):
        self.assertIsNone(self.auth.authenticate(self.request_with(make_token(secret="other-secret"))))

    def test_no_bearer_header(self):
        self.assertIsNone(self.auth.authenticate(self.factory.get("/api/auth/me/")))
