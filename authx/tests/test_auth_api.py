from django.core.cache import cache
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from users.models import User


class RegisterLoginTestCase(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()

    def register(self, **overrides):
        body = {
            "first_name": "Somsri",
            "last_name": "Jaidee",
            "nickname": "Som",
            "password": "secret1",
        }
        body.update(overrides)
        return self.client.post("/api/auth/register/", body, format="json")

    def test_register_creates_student_with_zero_points(self):
        resp = self.register()
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)

        data = resp.json()
        self.assertIn("access", data)
        self.assertIn("refresh", data)
        self.assertEqual(data["session"]["role"], "student")
        self.assertEqual(data["session"]["nickname"], "Som")

        user = User.objects.get(first_name="Somsri", last_name="Jaidee")
        self.assertEqual(user.points, 0)
        self.assertEqual(user.role, "student")
        self.assertTrue(user.username.startswith("somsrijaidee"))
        self.assertTrue(user.check_password("secret1"))

    def test_register_trims_names(self):
        resp = self.register(first_name="  Anan ", last_name=" Suk  ")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertTrue(User.objects.filter(first_name="Anan", last_name="Suk").exists())

    def test_register_duplicate_name_pair_rejected(self):
        self.register()
        resp = self.register(nickname="Other", password="another1")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(User.objects.filter(first_name="Somsri", last_name="Jaidee").count(), 1)

    def test_register_short_password_rejected(self):
        resp = self.register(password="12345")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", resp.json()["errors"])
        self.assertFalse(User.objects.exists())

    def test_register_blank_nickname_rejected(self):
        resp = self.register(nickname="   ")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_login_success(self):
        self.register()
        resp = self.client.post(
            "/api/auth/login/",
            {"first_name": "Somsri", "last_name": "Jaidee", "password": "secret1"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["session"]["first_name"], "Somsri")

        user = User.objects.get(first_name="Somsri")
        self.assertIsNotNone(user.last_login)

    def test_login_unknown_user(self):
        resp = self.client.post(
            "/api/auth/login/",
            {"first_name": "Nobody", "last_name": "Here", "password": "secret1"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.json()["errors"]["detail"], "User not found")

    def test_login_wrong_password(self):
        self.register()
        resp = self.client.post(
            "/api/auth/login/",
            {"first_name": "Somsri", "last_name": "Jaidee", "password": "wrong-one"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Incorrect password", str(resp.json()["errors"]))

    def test_access_token_authenticates_me(self):
        access = self.register().json()["access"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

        resp = self.client.get("/api/auth/me/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["last_name"], "Jaidee")

    def test_me_requires_authentication(self):
        resp = self.client.get("/api/auth/me/")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)


class AdminBootstrapTestCase(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()

    @override_settings(ADMIN_IDENTIFIER="Krit Boonmee")
    def test_configured_identity_becomes_admin_on_first_login(self):
        resp = self.client.post(
            "/api/auth/register/",
            {"first_name": "Krit", "last_name": "Boonmee", "nickname": "K", "password": "secret1"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.json()["session"]["role"], "admin")
        self.assertEqual(User.objects.get(first_name="Krit").role, "admin")

    @override_settings(ADMIN_IDENTIFIER="krit boonmee")
    def test_other_accounts_stay_students(self):
        resp = self.client.post(
            "/api/auth/register/",
            {"first_name": "Malee", "last_name": "Thongdee", "nickname": "Mali", "password": "secret1"},
            format="json",
        )
        self.assertEqual(resp.json()["session"]["role"], "student")

    @override_settings(ADMIN_IDENTIFIER="")
    def test_no_identifier_configured(self):
        resp = self.client.post(
            "/api/auth/register/",
            {"first_name": "Krit", "last_name": "Boonmee", "nickname": "K", "password": "secret1"},
            format="json",
        )
        self.assertEqual(resp.json()["session"]["role"], "student")
