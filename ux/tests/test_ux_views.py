from unittest import mock

from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from activities.models import Activity, Completion
from camps import services as camp_services
from users.models import User


class AdminOverviewGateTestCase(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.admin = User.objects.create_user(username="admin", password="secret1", role="admin")
        self.student = User.objects.create_user(username="som", password="secret1", points=12)

    def test_student_redirected_before_admin_data_is_read(self):
        self.client.force_authenticate(user=self.student)
        with mock.patch("ux.views.admin.get_admin_overview") as fetch:
            resp = self.client.get("/api/ux/admin/overview/")

        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(resp.json()["redirect"], "/dashboard")
        fetch.assert_not_called()

    def test_stale_admin_claim_is_not_trusted(self):
        # In-memory copy says admin, the stored profile says student
        self.student.role = "admin"
        self.client.force_authenticate(user=self.student)
        with mock.patch("ux.views.admin.get_admin_overview") as fetch:
            resp = self.client.get("/api/ux/admin/overview/")

        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        fetch.assert_not_called()

    def test_admin_loads_overview(self):
        self.client.force_authenticate(user=self.admin)
        with mock.patch("ux.views.admin.get_admin_overview", return_value={"students": []}) as fetch:
            resp = self.client.get("/api/ux/admin/overview/")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        fetch.assert_called_once()
        self.assertEqual(resp.json()["data"], {"students": []})

    def test_overview_contents(self):
        Activity.objects.create(name="Library Hour", points=10)
        self.client.force_authenticate(user=self.admin)

        resp = self.client.get("/api/ux/admin/overview/")
        data = resp.json()["data"]
        self.assertEqual([s["id"] for s in data["students"]], [self.student.id])
        self.assertEqual(len(data["activities"]), 1)
        self.assertEqual(data["point_presets"], [5, 10, 20, -5])

    def test_unauthenticated(self):
        resp = self.client.get("/api/ux/admin/overview/")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)


class DashboardTestCase(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.admin = User.objects.create_user(username="admin", password="secret1", role="admin")
        self.student = User.objects.create_user(username="som", password="secret1", nickname="Som", points=10)
        self.activity = Activity.objects.create(name="Library Hour", points=10)

    def test_student_dashboard(self):
        Completion.objects.create(
            user=self.student, activity=self.activity, activity_name=self.activity.name, points_earned=10
        )
        self.client.force_authenticate(user=self.student)

        resp = self.client.get("/api/ux/me/dashboard/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.json()["data"]
        self.assertEqual(data["profile"]["points"], 10)
        self.assertEqual(data["qr_payload"], f"{self.student.pk}-Som")
        self.assertEqual(data["completed_activity_ids"], [self.activity.id])
        self.assertTrue(data["activities"][0]["completed"])
        self.assertFalse(data["is_camp_mentor"])
        self.assertIsNone(data["camp"])

    def test_admin_sent_to_admin_view(self):
        self.client.force_authenticate(user=self.admin)
        resp = self.client.get("/api/ux/me/dashboard/")
        self.assertEqual(resp.json()["redirect"], "/admin")
        self.assertIsNone(resp.json()["data"])

    def test_mentor_dashboard_includes_camp(self):
        camp = camp_services.create_camp("Summer", [self.student.pk], created_by=self.admin)
        camp_services.enrol_kid(camp, "Pim", "Pim", "W", 1)
        self.client.force_authenticate(user=self.student)

        resp = self.client.get("/api/ux/me/dashboard/")
        data = resp.json()["data"]
        self.assertTrue(data["is_camp_mentor"])
        self.assertEqual(data["camp"]["camp"]["id"], camp.id)
        self.assertEqual(data["camp"]["total_kids"], 1)


class MentorCampViewTestCase(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.admin = User.objects.create_user(username="admin", password="secret1", role="admin")
        self.mentor = User.objects.create_user(username="mentor", password="secret1")
        self.student = User.objects.create_user(username="som", password="secret1")
        self.camp = camp_services.create_camp("Summer", [self.mentor.pk], created_by=self.admin)
        camp_services.enrol_kid(self.camp, "Fah", "Fahsai", "R", 2)
        camp_services.enrol_kid(self.camp, "Pim", "Pim", "W", 1)

    def test_mentor_gets_snapshot(self):
        self.client.force_authenticate(user=self.mentor)
        resp = self.client.get("/api/ux/me/camp/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.json()["data"]
        self.assertEqual(data["camp"]["name"], "Summer")
        self.assertEqual([g["group_number"] for g in data["groups"]], [1, 2])

    def test_non_mentor_redirected(self):
        self.client.force_authenticate(user=self.student)
        resp = self.client.get("/api/ux/me/camp/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(resp.json()["redirect"], "/dashboard")
