from django.db import models
from django.conf import settings

from core.constants import POINT_METHOD_CHOICES, POINT_METHOD_QR_SCAN


class PointLog(models.Model):
    """
    Immutable audit trail of points awarded by scanning a student's QR code.
    Names are copied at write time so the log survives profile edits.
    """
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="point_logs",
    )
    student_name = models.CharField(max_length=255)

    points = models.IntegerField(help_text="Positive or negative point value")
    method = models.CharField(
        max_length=32,
        choices=POINT_METHOD_CHOICES,
        default=POINT_METHOD_QR_SCAN,
    )

    admin = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="awarded_point_logs",
    )
    admin_name = models.CharField(max_length=255)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "point_logs"
        indexes = [
            models.Index(fields=["student", "-created_at"], name="point_logs_student_idx"),
        ]

    def __str__(self):
        return f"{self.student_name} ({self.points:+d}) by {self.admin_name}: {self.method}"
