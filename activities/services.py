# activities/services.py

import logging
from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Sum
from rest_framework import status
from rest_framework.exceptions import APIException

from core.exceptions import StoreUnavailable

from gamification.engine import PointsEngine
from .models import Activity, Completion

logger = logging.getLogger("ffpoints")

User = get_user_model()


class AlreadyCompleted(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Activity already completed."
    default_code = "already_completed"


@dataclass
class CompletionResult:
    completion: Completion
    points: int  # user's stored balance after the credit


def completed_activity_ids(user):
    return set(
        Completion.objects.filter(user=user, activity__isnull=False)
        .values_list("activity_id", flat=True)
    )


def complete_activity(user, activity: Activity) -> CompletionResult:
    """
    Credit an activity's points to a user at most once.

    The existence check gives a friendly 409; the unique constraint is what
    actually rejects a concurrent duplicate. Record and credit share one
    transaction, so a rejected duplicate never double-credits.
    """
    if Completion.objects.filter(user=user, activity=activity).exists():
        raise AlreadyCompleted()

    try:
        with transaction.atomic():
            completion = Completion.objects.create(
                user=user,
                activity=activity,
                activity_name=activity.name,
                points_earned=activity.points,
            )
            points = PointsEngine.apply_delta(User, user.pk, activity.points)
    except IntegrityError:
        logger.warning(f"Duplicate completion rejected: user={user.pk} activity={activity.pk}")
        raise AlreadyCompleted()
    except DatabaseError:
        logger.exception(f"Completion of activity {activity.pk} by user {user.pk} failed")
        raise StoreUnavailable()

    logger.info(f"User {user.pk} completed activity {activity.pk} (+{activity.points})")
    return CompletionResult(completion=completion, points=points)


def completion_history(user):
    completions = Completion.objects.filter(user=user).order_by("-completed_at")
    total = completions.aggregate(total=Sum("points_earned"))["total"] or 0
    return completions, total
