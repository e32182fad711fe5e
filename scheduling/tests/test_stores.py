from datetime import time
from decimal import Decimal

from django.test import TestCase

from scheduling.models import Booking, Member, Service, Trainer
from scheduling.services.appointment_lifecycle import AppointmentLifecycle
from scheduling.services.results import ErrorKind
from scheduling.services.stores import AvailabilityWindowStore, BookingStore, QualificationStore
from scheduling.services.trainer_search import TrainerEligibilitySearch
from trainers.models import AvailabilityWindow, Qualification

from .fakes import at


class SchedulingDataMixin:
    """Three trainers working Mondays 09:00-17:00, one yoga service."""

    def create_fixtures(self):
        self.member = Member.objects.create(name="Ayse Demir", email="ayse@example.com")
        self.other_member = Member.objects.create(name="Can Yilmaz", email="can@example.com")
        self.trainers = [
            Trainer.objects.create(name=f"Trainer {n}", email=f"trainer{n}@gym.example.com")
            for n in (1, 2, 3)
        ]
        self.yoga = Service.objects.create(name="Yoga", duration_minutes=60, price=Decimal("20.00"))
        for trainer in self.trainers:
            AvailabilityWindow.objects.create(
                trainer=trainer, day_of_week=1, start_time=time(9), end_time=time(17)
            )

    def make_booking(self, trainer, member=None, start=None, status=Booking.CONFIRMED, is_active=True):
        return Booking.objects.create(
            member=member or self.member,
            trainer=trainer,
            service=self.yoga,
            start_time=start or at(10),
            duration_minutes=60,
            price=Decimal("20.00"),
            status=status,
            is_active=is_active,
        )


class BookingStoreTests(SchedulingDataMixin, TestCase):
    def setUp(self):
        self.create_fixtures()
        self.store = BookingStore()

    def test_trainer_loads_skip_inactive_and_terminal_bookings(self):
        trainer = self.trainers[0]
        live = self.make_booking(trainer, start=at(10))
        pending = self.make_booking(trainer, start=at(12), status=Booking.PENDING)
        self.make_booking(trainer, start=at(13), status=Booking.CANCELLED)
        self.make_booking(trainer, start=at(14), status=Booking.COMPLETED)
        self.make_booking(trainer, start=at(15), is_active=False)
        self.make_booking(self.trainers[1], start=at(10))

        loaded = self.store.load_active_for_trainer(trainer.pk)
        self.assertEqual([b.pk for b in loaded], [live.pk, pending.pk])

    def test_member_loads_are_scoped_to_member(self):
        mine = self.make_booking(self.trainers[0], member=self.member)
        self.make_booking(self.trainers[1], member=self.other_member)
        self.assertEqual([b.pk for b in self.store.load_active_for_member(self.member.pk)], [mine.pk])

    def test_load_by_id_hides_soft_deleted_bookings(self):
        booking = self.make_booking(self.trainers[0], is_active=False)
        self.assertIsNone(self.store.load_by_id(booking.pk))
        self.assertIsNone(self.store.load_by_id(999999))

    def test_update_saves_only_named_fields(self):
        booking = self.make_booking(self.trainers[0], status=Booking.PENDING)
        booking.status = Booking.CONFIRMED
        booking.notes = "not saved"
        self.store.update(booking, ["status"])
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.CONFIRMED)
        self.assertEqual(booking.notes, "")


class WindowAndQualificationStoreTests(SchedulingDataMixin, TestCase):
    def setUp(self):
        self.create_fixtures()

    def test_windows_filtered_by_trainer_day_and_active(self):
        trainer = self.trainers[0]
        AvailabilityWindow.objects.create(trainer=trainer, day_of_week=1, start_time=time(18), end_time=time(20), is_active=False)
        AvailabilityWindow.objects.create(trainer=trainer, day_of_week=2, start_time=time(9), end_time=time(12))

        windows = AvailabilityWindowStore().load_active_windows(trainer.pk, 1)
        self.assertEqual([(w.start_time, w.end_time) for w in windows], [(time(9), time(17))])

    def test_qualified_ids_are_distinct_ordered_and_active(self):
        t1, t2, t3 = self.trainers
        pilates = Service.objects.create(name="Pilates", duration_minutes=50, price=Decimal("20.00"))
        Qualification.objects.create(trainer=t3, service=self.yoga)
        Qualification.objects.create(trainer=t1, service=self.yoga)
        Qualification.objects.create(trainer=t2, service=self.yoga, is_active=False)
        Qualification.objects.create(trainer=t2, service=pilates)

        self.assertEqual(QualificationStore().load_qualified_trainer_ids(self.yoga.pk), [t1.pk, t3.pk])

        t3.is_active = False
        t3.save()
        self.assertEqual(QualificationStore().load_qualified_trainer_ids(self.yoga.pk), [t1.pk])


class DatabaseLifecycleTests(SchedulingDataMixin, TestCase):
    """End-to-end through the ORM stores (default constructor wiring)."""

    def setUp(self):
        self.create_fixtures()
        self.lifecycle = AppointmentLifecycle()

    def book(self, trainer, member=None, start=None):
        member = member or self.member
        return self.lifecycle.book(member.pk, trainer.pk, self.yoga.pk, start or at(10), 60, Decimal("20.00"))

    def test_book_confirm_delete_rebook(self):
        trainer = self.trainers[0]
        first = self.book(trainer)
        self.assertTrue(first.ok)
        self.assertEqual(Booking.objects.get(pk=first.value.pk).status, Booking.PENDING)

        self.assertTrue(self.lifecycle.confirm(first.value.pk).ok)
        self.assertEqual(self.book(trainer, member=self.other_member).kind, ErrorKind.TRAINER_CONFLICT)

        self.assertTrue(self.lifecycle.soft_delete(first.value.pk).ok)
        stored = Booking.objects.get(pk=first.value.pk)
        self.assertFalse(stored.is_active)
        self.assertEqual(stored.status, Booking.CONFIRMED)

        self.assertTrue(self.book(trainer, member=self.other_member).ok)

    def test_cancel_persists_reason(self):
        booking = self.book(self.trainers[0]).value
        self.assertTrue(self.lifecycle.cancel(booking.pk, "Moved city").ok)
        stored = Booking.objects.get(pk=booking.pk)
        self.assertEqual(stored.status, Booking.CANCELLED)
        self.assertEqual(stored.notes, "[Cancel reason] Moved city")

    def test_search_with_database_stores(self):
        t1, t2, t3 = self.trainers
        Qualification.objects.create(trainer=t1, service=self.yoga)
        Qualification.objects.create(trainer=t2, service=self.yoga)
        self.make_booking(t2, member=self.other_member, start=at(10))

        outcome = TrainerEligibilitySearch().find_available_trainers(self.yoga.pk, at(10), 60)
        self.assertEqual(outcome.value, [t1.pk])
