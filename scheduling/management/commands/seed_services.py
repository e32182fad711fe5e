"""
seed_services.py
----------------
Seeds (creates or updates) the gym's service catalog. Safe to run any time;
it upserts by unique name.

Usage:
    python manage.py seed_services
"""

from decimal import Decimal

from django.core.management.base import BaseCommand

from scheduling.models import Service


CATALOG = [
    # One-to-one coaching
    {"name": "Personal Training - 30 min", "description": "One-to-one session",   "duration_minutes": 30, "price": Decimal("25.00")},
    {"name": "Personal Training - 60 min", "description": "One-to-one session",   "duration_minutes": 60, "price": Decimal("45.00")},
    {"name": "Fitness Assessment",         "description": "Body composition + goals", "duration_minutes": 45, "price": Decimal("30.00")},

    # Studio classes
    {"name": "Pilates",                    "description": "Mat pilates",          "duration_minutes": 50, "price": Decimal("20.00")},
    {"name": "Yoga",                       "description": "Vinyasa flow",         "duration_minutes": 60, "price": Decimal("20.00")},
    {"name": "Boxing Technique",           "description": "Pads and footwork",    "duration_minutes": 45, "price": Decimal("22.00")},

    # Extras
    {"name": "Nutrition Consultation",     "description": "Meal planning",        "duration_minutes": 30, "price": Decimal("35.00")},
]


SYNCED_FIELDS = ("description", "duration_minutes", "price")


def _sync(service, entry):
    """Bring an existing row back in line with its catalog entry. Returns True if anything changed."""
    drifted = [f for f in SYNCED_FIELDS if getattr(service, f) != entry[f]]
    for field in drifted:
        setattr(service, field, entry[field])
    if not service.is_active:
        service.is_active = True
        drifted.append("is_active")
    if drifted:
        service.save(update_fields=drifted)
    return bool(drifted)


class Command(BaseCommand):
    help = "Seed or update the gym service catalog."

    def handle(self, *args, **options):
        created = updated = 0

        for entry in CATALOG:
            service, was_created = Service.objects.get_or_create(
                name=entry["name"],
                defaults={**{f: entry[f] for f in SYNCED_FIELDS}, "is_active": True},
            )
            if was_created:
                created += 1
            elif _sync(service, entry):
                updated += 1

        self.stdout.write(self.style.SUCCESS(f"Seed complete. Created={created}, Updated={updated}"))
