from unittest import mock

from django.core.cache import cache
from django.db import IntegrityError, OperationalError, transaction
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from activities import services
from activities.models import Activity, Completion
from users.models import User


class ActivityApiTestCase(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.admin = User.objects.create_user(username="admin", password="secret1", role="admin")
        self.student = User.objects.create_user(
            username="som", password="secret1", first_name="Somsri", last_name="Jaidee"
        )
        self.activity = Activity.objects.create(name="Library Hour", points=10, created_by=self.admin)

    def auth(self, user):
        self.client.force_authenticate(user=user)

    def complete_url(self, activity=None):
        return f"/api/activities/{(activity or self.activity).id}/complete/"

    def test_list_marks_completed(self):
        other = Activity.objects.create(name="Assembly", points=5)
        Completion.objects.create(
            user=self.student, activity=self.activity, activity_name=self.activity.name, points_earned=10
        )
        self.auth(self.student)

        resp = self.client.get("/api/activities/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        flags = {a["id"]: a["completed"] for a in resp.json()}
        self.assertTrue(flags[self.activity.id])
        self.assertFalse(flags[other.id])

    def test_complete_credits_points_once(self):
        self.auth(self.student)

        resp = self.client.post(self.complete_url())
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.json()["points"], 10)
        self.assertEqual(resp.json()["completion"]["points_earned"], 10)

        resp = self.client.post(self.complete_url())
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)

        self.student.refresh_from_db()
        self.assertEqual(self.student.points, 10)
        self.assertEqual(Completion.objects.filter(user=self.student).count(), 1)

    def test_store_failure_on_completion_is_503(self):
        self.auth(self.student)
        with mock.patch.object(Completion.objects, "create", side_effect=OperationalError("offline")):
            resp = self.client.post(self.complete_url())

        self.assertEqual(resp.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertFalse(Completion.objects.exists())
        self.student.refresh_from_db()
        self.assertEqual(self.student.points, 0)

    def test_store_failure_on_activity_create_is_503(self):
        self.auth(self.admin)
        with mock.patch.object(Activity.objects, "create", side_effect=OperationalError("offline")):
            resp = self.client.post("/api/activities/", {"name": "Cleanup", "points": 20}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertFalse(Activity.objects.filter(name="Cleanup").exists())

    def test_store_failure_on_activity_delete_is_503(self):
        self.auth(self.admin)
        with mock.patch.object(Activity, "delete", side_effect=OperationalError("offline")):
            resp = self.client.delete(f"/api/activities/{self.activity.id}/")

        self.assertEqual(resp.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertTrue(Activity.objects.filter(pk=self.activity.pk).exists())

    def test_negative_activity_lowers_balance(self):
        penalty = Activity.objects.create(name="Late", points=-5)
        self.auth(self.student)

        resp = self.client.post(self.complete_url(penalty))
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.json()["points"], -5)

    def test_complete_unknown_activity(self):
        self.auth(self.student)
        resp = self.client.post("/api/activities/999999/complete/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_admin_redirected_from_completion(self):
        self.auth(self.admin)
        resp = self.client.post(self.complete_url())
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(resp.json()["redirect"], "/admin")
        self.assertFalse(Completion.objects.exists())

    def test_admin_creates_activity(self):
        self.auth(self.admin)
        resp = self.client.post(
            "/api/activities/",
            {"name": "Cleanup", "description": "Weekend", "points": 20, "date": "2024-06-01"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        activity = Activity.objects.get(name="Cleanup")
        self.assertEqual(activity.created_by, self.admin)

    def test_student_cannot_create_activity(self):
        self.auth(self.student)
        resp = self.client.post("/api/activities/", {"name": "Free points", "points": 100}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(resp.json()["redirect"], "/dashboard")
        self.assertFalse(Activity.objects.filter(name="Free points").exists())

    def test_delete_keeps_history(self):
        self.auth(self.student)
        self.client.post(self.complete_url())

        self.auth(self.admin)
        resp = self.client.delete(f"/api/activities/{self.activity.id}/")
        self.assertEqual(resp.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Activity.objects.filter(pk=self.activity.pk).exists())

        completion = Completion.objects.get(user=self.student)
        self.assertIsNone(completion.activity)
        self.assertEqual(completion.activity_name, "Library Hour")

    def test_history_totals(self):
        second = Activity.objects.create(name="Assembly", points=5)
        self.auth(self.student)
        self.client.post(self.complete_url())
        self.client.post(self.complete_url(second))

        resp = self.client.get("/api/activities/history/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.json()
        self.assertEqual(data["count"], 2)
        self.assertEqual(data["total_points_earned"], 15)


class CompletionUniquenessTestCase(TestCase):
    def setUp(self):
        self.student = User.objects.create_user(username="som", password="secret1")
        self.activity = Activity.objects.create(name="Library Hour", points=10)

    def test_database_rejects_duplicate(self):
        Completion.objects.create(user=self.student, activity=self.activity, activity_name="x", points_earned=10)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Completion.objects.create(
                    user=self.student, activity=self.activity, activity_name="x", points_earned=10
                )

    def test_concurrent_duplicate_does_not_double_credit(self):
        """The unique constraint rejects the racing duplicate (see DESIGN.md, open question 1)."""
        services.complete_activity(self.student, self.activity)

        # Second request passed the existence check before the first one committed
        with mock.patch.object(Completion.objects, "filter") as filter_:
            filter_.return_value.exists.return_value = False
            with self.assertRaises(services.AlreadyCompleted):
                services.complete_activity(self.student, self.activity)

        self.student.refresh_from_db()
        self.assertEqual(self.student.points, 10)
        self.assertEqual(Completion.objects.filter(user=self.student).count(), 1)
