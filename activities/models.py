from django.conf import settings
from django.db import models


class Activity(models.Model):
    """
    A named, point-valued task defined by an admin.
    """
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    points = models.IntegerField(help_text="Reward credited once per student")

    date = models.DateField(null=True, blank=True)
    time = models.TimeField(null=True, blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_activities",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "activities"
        ordering = ["-created_at"]
        verbose_name_plural = "activities"

    def __str__(self):
        return f"{self.name} ({self.points} pts)"


class Completion(models.Model):
    """
    Append-only record that a user claimed an activity's reward.
    At most one per (user, activity), enforced by the database.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="completions",
    )
    # History survives activity deletion
    activity = models.ForeignKey(
        Activity,
        on_delete=models.SET_NULL,
        null=True,
        related_name="completions",
    )
    activity_name = models.CharField(max_length=200)

    points_earned = models.IntegerField()
    completed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "completed_activities"
        ordering = ["-completed_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "activity"],
                name="unique_user_activity_completion",
            ),
        ]

    def __str__(self):
        return f"{self.user} completed {self.activity_name} (+{self.points_earned})"
