import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Camp",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="created_camps",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "mentors",
                    models.ManyToManyField(
                        blank=True,
                        related_name="mentor_camps",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "camps",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="CampKid",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nickname", models.CharField(max_length=100)),
                ("first_name", models.CharField(max_length=150)),
                ("last_name", models.CharField(max_length=150)),
                ("group_number", models.IntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("points", models.IntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "camp",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="kids",
                        to="camps.camp",
                    ),
                ),
            ],
            options={
                "db_table": "camp_kids",
                "ordering": ["-points", "id"],
                "indexes": [
                    models.Index(fields=["camp", "-points"], name="camp_kids_camp_points_idx"),
                    models.Index(fields=["camp", "group_number"], name="camp_kids_camp_group_idx"),
                ],
            },
        ),
    ]
