# ux/services/admin.py

from django.contrib.auth import get_user_model
from django.db.models import Count

from activities.models import Activity
from activities.serializers import ActivitySerializer
from camps.models import Camp
from camps.serializers import CampSerializer
from core.constants import POINT_PRESETS, ROLE_STUDENT
from users.serializers import StudentSerializer

User = get_user_model()


def get_admin_overview():
    students = User.objects.filter(role=ROLE_STUDENT).order_by("-points", "id")
    camps = Camp.objects.annotate(kids_count=Count("kids")).prefetch_related("mentors")

    return {
        "students": StudentSerializer(students, many=True).data,
        "activities": ActivitySerializer(Activity.objects.all(), many=True).data,
        "camps": CampSerializer(camps, many=True).data,
        "point_presets": list(POINT_PRESETS),
    }
