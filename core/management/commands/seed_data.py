import random

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from activities.models import Activity
from camps.models import Camp, CampKid
from camps.services import create_camp
from core.constants import ROLE_ADMIN, ROLE_STUDENT

User = get_user_model()


STUDENTS = [
    ("Somsri", "Jaidee", "Som"),
    ("Anan", "Suksawat", "Nan"),
    ("Malee", "Thongdee", "Mali"),
]

ACTIVITIES = [
    ("Morning Assembly", "Attend the school assembly", 5),
    ("Library Hour", "Read for an hour in the library", 10),
    ("Community Cleanup", "Join the weekend cleanup", 20),
]

KIDS = [
    ("Pim", "Pimchanok", "Wong", 1),
    ("Ton", "Thanawat", "Chai", 1),
    ("Fah", "Fahsai", "Rattana", 2),
    ("Bank", "Banchong", "Sri", 2),
]


class Command(BaseCommand):
    help = "Seeds the database with a demo admin, students, activities and a camp"

    def add_arguments(self, parser):
        parser.add_argument("--password", default="password", help="Password for every seeded account")

    @transaction.atomic
    def handle(self, *args, **options):
        password = options["password"]
        self.stdout.write("🌱 Seeding data...")

        admin, _ = User.objects.get_or_create(
            username="admin",
            defaults={"first_name": "Admin", "last_name": "User", "role": ROLE_ADMIN},
        )
        admin.set_password(password)
        admin.save()

        students = []
        for first_name, last_name, nickname in STUDENTS:
            user, _ = User.objects.get_or_create(
                username=f"{first_name}{last_name}".lower(),
                defaults={
                    "first_name": first_name,
                    "last_name": last_name,
                    "nickname": nickname,
                    "role": ROLE_STUDENT,
                },
            )
            user.set_password(password)
            user.save()
            students.append(user)
        self.stdout.write(f"Users: admin + {len(students)} students")

        today = timezone.localdate()
        for name, description, points in ACTIVITIES:
            Activity.objects.get_or_create(
                name=name,
                defaults={
                    "description": description,
                    "points": points,
                    "date": today,
                    "created_by": admin,
                },
            )
        self.stdout.write(f"Activities: {Activity.objects.count()}")

        camp = Camp.objects.filter(name="Summer Camp").first()
        if camp is None:
            camp = create_camp("Summer Camp", [students[0].pk], created_by=admin)

        for nickname, first_name, last_name, group_number in KIDS:
            CampKid.objects.get_or_create(
                camp=camp,
                nickname=nickname,
                defaults={
                    "first_name": first_name,
                    "last_name": last_name,
                    "group_number": group_number,
                    "points": random.choice([0, 5, 10, 20]),
                },
            )
        self.stdout.write(f"Camp '{camp.name}': {camp.kids.count()} kids")

        self.stdout.write(self.style.SUCCESS("✅ Seeding complete!"))
