from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from users.models import User


class UserApiTestCase(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.admin = User.objects.create_user(username="admin", password="secret1", role="admin")
        self.som = User.objects.create_user(
            username="som", password="secret1", first_name="Somsri", last_name="Jaidee", points=5
        )
        self.nan = User.objects.create_user(username="nan", password="secret1", points=20)

    def auth(self, user):
        self.client.force_authenticate(user=user)

    def test_me_reads_stored_profile(self):
        User.objects.filter(pk=self.som.pk).update(points=42)
        self.auth(self.som)

        resp = self.client.get("/api/users/me/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["points"], 42)
        self.assertEqual(resp.json()["display_name"], "Somsri Jaidee")

    def test_students_leaderboard(self):
        self.auth(self.admin)
        resp = self.client.get("/api/users/students/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([s["id"] for s in resp.json()], [self.nan.id, self.som.id])

    def test_students_admin_only(self):
        self.auth(self.som)
        resp = self.client.get("/api/users/students/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(resp.json()["redirect"], "/dashboard")

    def test_adjust_points(self):
        self.auth(self.admin)
        resp = self.client.post(f"/api/users/{self.som.pk}/points/", {"delta": -5}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["points"], 0)

        resp = self.client.post(f"/api/users/{self.som.pk}/points/", {"delta": 20}, format="json")
        self.assertEqual(resp.json()["points"], 20)

    def test_adjust_points_rejects_non_integer(self):
        self.auth(self.admin)
        resp = self.client.post(f"/api/users/{self.som.pk}/points/", {"delta": "lots"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_adjust_points_unknown_user(self):
        self.auth(self.admin)
        resp = self.client.post("/api/users/999999/points/", {"delta": 5}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_student_cannot_adjust(self):
        self.auth(self.som)
        resp = self.client.post(f"/api/users/{self.som.pk}/points/", {"delta": 100}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.som.refresh_from_db()
        self.assertEqual(self.som.points, 5)
