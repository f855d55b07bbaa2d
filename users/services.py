# users/services.py

import logging
import random

from django.conf import settings
from django.contrib.auth import get_user_model

from core.constants import ROLE_ADMIN, ROLE_STUDENT

logger = logging.getLogger("ffpoints")

User = get_user_model()


def generate_username(first_name: str, last_name: str) -> str:
    """
    Username from first + last name + random number, made unique.
    """
    base = f"{first_name.strip().lower()}{last_name.strip().lower()}".replace(" ", "")
    base = base or "student"
    username = f"{base}{random.randint(0, 999)}"
    while User.objects.filter(username=username).exists():
        username = f"{base}{random.randint(0, 9999)}"
    return username


def find_by_name_pair(first_name: str, last_name: str):
    return User.objects.filter(
        first_name=first_name.strip(),
        last_name=last_name.strip(),
    )


def create_student(first_name, last_name, nickname, password):
    user = User.objects.create_user(
        username=generate_username(first_name, last_name),
        password=password,
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        nickname=nickname.strip(),
        role=ROLE_STUDENT,
        points=0,
    )
    logger.info(f"Registered student {user.username} (id={user.id})")
    return user


def matches_admin_identifier(user) -> bool:
    identifier = (getattr(settings, "ADMIN_IDENTIFIER", "") or "").strip().lower()
    if not identifier:
        return False

    candidates = {
        (user.username or "").lower(),
        (user.email or "").lower(),
        f"{user.first_name} {user.last_name}".strip().lower(),
    }
    return identifier in candidates


def bootstrap_admin(user) -> bool:
    """
    Promote the configured ADMIN_IDENTIFIER account to admin (first login).
    Returns True when the role changed.
    """
    if user.role == ROLE_ADMIN or not matches_admin_identifier(user):
        return False

    user.role = ROLE_ADMIN
    user.save(update_fields=["role"])
    logger.info(f"Bootstrapped {user.username} into the admin role")
    return True


def session_payload(user) -> dict:
    """
    Convenience copy of the logged-in identity for client displays.
    Never used for authorization; the stored profile is authoritative.
    """
    return {
        "id": user.id,
        "username": user.username,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "nickname": user.nickname,
        "role": user.role,
    }
