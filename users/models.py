# users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models

from core.constants import ROLE_ADMIN, ROLE_CHOICES, ROLE_STUDENT


class User(AbstractUser):
    """
    One profile per person. Points are mutated only through
    gamification.engine.PointsEngine (atomic increments).
    """
    ROLE_STUDENT = ROLE_STUDENT
    ROLE_ADMIN = ROLE_ADMIN

    role = models.CharField(
        max_length=30,
        choices=ROLE_CHOICES,
        default=ROLE_STUDENT,
    )

    nickname = models.CharField(max_length=100, blank=True, default="")
    student_id = models.CharField(
        max_length=64,
        blank=True,
        null=True,
        db_index=True,
        help_text="External student number, accepted by the QR scanner",
    )
    points = models.IntegerField(default=0, help_text="Running balance, may go negative")

    # 🔹 Camp mentoring
    camp_mentor = models.BooleanField(default=False)
    camp = models.ForeignKey(
        "camps.Camp",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="mentor_profiles",
    )

    class Meta:
        db_table = "users"
        indexes = [
            models.Index(fields=["first_name", "last_name"], name="users_name_pair_idx"),
            models.Index(fields=["role", "-points"], name="users_role_points_idx"),  # Leaderboard
        ]

    @property
    def is_admin_role(self):
        return self.role == ROLE_ADMIN

    @property
    def display_name(self):
        return self.nickname or f"{self.first_name} {self.last_name}".strip() or self.username

    def __str__(self):
        return self.username
