import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("scheduling", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="AvailabilityWindow",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("day_of_week", models.PositiveSmallIntegerField(choices=[(0, "Sunday"), (1, "Monday"), (2, "Tuesday"), (3, "Wednesday"), (4, "Thursday"), (5, "Friday"), (6, "Saturday")], validators=[django.core.validators.MaxValueValidator(6)])),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("is_active", models.BooleanField(default=True)),
                ("trainer", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="availability_windows", to="scheduling.trainer")),
            ],
            options={
                "ordering": ["trainer_id", "day_of_week", "start_time"],
            },
        ),
        migrations.CreateModel(
            name="Qualification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("experience_years", models.PositiveSmallIntegerField(default=0)),
                ("certificate_name", models.CharField(blank=True, max_length=200)),
                ("is_active", models.BooleanField(default=True)),
                ("service", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="qualifications", to="scheduling.service")),
                ("trainer", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="qualifications", to="scheduling.trainer")),
            ],
            options={
                "ordering": ["trainer_id", "service_id"],
                "constraints": [
                    models.UniqueConstraint(fields=("trainer", "service"), name="uniq_trainer_service_qualification"),
                ],
            },
        ),
    ]
