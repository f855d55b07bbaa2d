import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("users", "0001_initial"),
        ("camps", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="user",
            name="camp",
            field=models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="mentor_profiles",
                to="camps.camp",
            ),
        ),
    ]
