# ux/services/dashboard.py

from activities.models import Activity
from activities.serializers import ActivitySerializer
from activities.services import completed_activity_ids
from camps.models import Camp
from camps.services import camp_snapshot
from scanning.codec import identity_payload_for
from users.serializers import UserSerializer


def get_mentor_camp(user):
    """
    The camp a mentor manages, or None when the flags don't line up.
    """
    if not user.camp_mentor or not user.camp_id:
        return None
    return Camp.objects.filter(pk=user.camp_id).first()


def get_student_dashboard(user):
    # 1️⃣ Profile (stored copy)
    user.refresh_from_db()

    # 2️⃣ Catalog + what this student already claimed
    completed_ids = completed_activity_ids(user)
    activities = ActivitySerializer(
        Activity.objects.all(),
        many=True,
        context={"completed_ids": completed_ids},
    ).data

    # 3️⃣ Camp tab for mentors
    camp = get_mentor_camp(user)

    return {
        "profile": UserSerializer(user).data,
        "qr_payload": identity_payload_for(user),
        "activities": activities,
        "completed_activity_ids": sorted(completed_ids),
        "is_camp_mentor": camp is not None,
        "camp": camp_snapshot(camp) if camp else None,
    }
