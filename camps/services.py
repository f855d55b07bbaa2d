# camps/services.py

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from gamification.engine import PointsEngine, RosterCache
from .models import Camp, CampKid

logger = logging.getLogger("ffpoints")

User = get_user_model()


def kid_record(kid):
    return {
        "id": kid.id,
        "camp_id": kid.camp_id,
        "nickname": kid.nickname,
        "first_name": kid.first_name,
        "last_name": kid.last_name,
        "group_number": kid.group_number,
        "points": kid.points,
    }


def load_roster(camp) -> RosterCache:
    return RosterCache(kid_record(kid) for kid in CampKid.objects.filter(camp=camp))


def ranked(records):
    return [{**record, "rank": index + 1} for index, record in enumerate(records)]


def group_numbers(kids):
    """Sorted distinct group numbers of the given kid records."""
    return sorted({kid["group_number"] for kid in kids})


def group_summary(kids):
    """
    Per group: member count, total points and rounded average.
    """
    summary = []
    for number in group_numbers(kids):
        members = [kid for kid in kids if kid["group_number"] == number]
        total = sum(kid["points"] for kid in members)
        summary.append({
            "group_number": number,
            "count": len(members),
            "total_points": total,
            "average_points": round(total / len(members)) if members else 0,
        })
    return summary


def camp_snapshot(camp, roster: RosterCache = None) -> dict:
    roster = roster if roster is not None else load_roster(camp)
    kids = roster.ordered()
    return {
        "camp": {
            "id": camp.id,
            "name": camp.name,
            "mentor_ids": list(camp.mentors.values_list("id", flat=True)),
            "created_by": camp.created_by_id,
            "created_at": camp.created_at,
        },
        "kids": ranked(kids),
        "groups": group_summary(kids),
        "total_kids": len(kids),
    }


@transaction.atomic
def create_camp(name, mentor_ids, created_by):
    """
    Create a camp and flag every selected mentor for it.
    """
    camp = Camp.objects.create(name=name.strip(), created_by=created_by)

    mentors = User.objects.filter(pk__in=mentor_ids)
    camp.mentors.set(mentors)
    mentors.update(camp_mentor=True, camp=camp)

    logger.info(f"Camp {camp.id} '{camp.name}' created with {len(mentor_ids)} mentor(s)")
    return camp


def enrol_kid(camp, nickname, first_name, last_name, group_number):
    kid = CampKid.objects.create(
        camp=camp,
        nickname=nickname.strip(),
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        group_number=int(group_number),
        points=0,
    )
    logger.info(f"Kid {kid.id} enrolled in camp {camp.id}, group {kid.group_number}")
    return kid


def change_kid_points(kid, delta: int):
    """
    Single kid mutation. Returns (change, roster) where the roster reflects
    only what the store confirmed.
    """
    roster = load_roster(kid.camp)
    change = PointsEngine.change(CampKid, kid.pk, delta)
    roster.apply(change)
    return change, roster


def award_group(camp, group_number: int, delta: int):
    """
    Award `delta` to every kid in one group, one increment per kid.
    Returns (result, roster) or (None, roster) when the group is empty.
    """
    roster = load_roster(camp)
    member_ids = [
        kid["id"] for kid in roster.ordered() if kid["group_number"] == group_number
    ]
    if not member_ids:
        return None, roster

    result = PointsEngine.apply_to_each(CampKid, member_ids, delta)
    roster.apply_bulk(result)
    return result, roster
