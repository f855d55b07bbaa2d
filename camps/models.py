from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Camp(models.Model):
    """
    Offline sub-program with its own roster of kids and its own point ledger.
    Kid points never touch User.points.
    """
    name = models.CharField(max_length=200)
    mentors = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="mentor_camps",
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_camps",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "camps"
        ordering = ["-created_at"]

    def __str__(self):
        return self.name


class CampKid(models.Model):
    camp = models.ForeignKey(
        Camp,
        on_delete=models.CASCADE,
        related_name="kids",
    )
    nickname = models.CharField(max_length=100)
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150)
    group_number = models.IntegerField(validators=[MinValueValidator(1)])
    points = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "camp_kids"
        ordering = ["-points", "id"]
        indexes = [
            models.Index(fields=["camp", "-points"], name="camp_kids_camp_points_idx"),  # Leaderboard
            models.Index(fields=["camp", "group_number"], name="camp_kids_camp_group_idx"),
        ]

    def __str__(self):
        return f"{self.nickname} (group {self.group_number}) @ {self.camp}: {self.points}"
