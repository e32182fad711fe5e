from datetime import time

from django.test import SimpleTestCase

from scheduling.services.availability_checker import AvailabilityChecker
from scheduling.services.results import ErrorKind, StoreUnavailable
from scheduling.services.trainer_search import TrainerEligibilitySearch

from .fakes import (
    BrokenStore,
    InMemoryBookingStore,
    InMemoryQualificationStore,
    InMemoryWindowStore,
    at,
    make_booking,
    make_window,
)

YOGA = 10
BOXING = 11


class TrainerEligibilitySearchTests(SimpleTestCase):
    def setUp(self):
        self.bookings = InMemoryBookingStore()
        self.windows = InMemoryWindowStore([
            make_window(trainer_id=1, start=time(9), end=time(17)),
            make_window(trainer_id=2, start=time(9), end=time(17)),
            make_window(trainer_id=3, start=time(9), end=time(17)),
        ])
        self.qualifications = InMemoryQualificationStore({YOGA: [1, 2], BOXING: []})
        self.search = TrainerEligibilitySearch(
            qualifications=self.qualifications,
            availability=AvailabilityChecker(bookings=self.bookings, windows=self.windows),
        )

    def test_excludes_unqualified_and_double_booked_trainers(self):
        # trainer 3 is free but not qualified; trainer 2 is qualified but busy
        self.bookings.insert(make_booking(trainer_id=2, member_id=9, start=at(10)))
        outcome = self.search.find_available_trainers(YOGA, at(10), 60)
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.value, [1])

    def test_excludes_trainers_not_working_that_slot(self):
        self.windows.windows = [
            make_window(trainer_id=1, start=time(9), end=time(17)),
            make_window(trainer_id=2, start=time(14), end=time(17)),
        ]
        outcome = self.search.find_available_trainers(YOGA, at(10), 60)
        self.assertEqual(outcome.value, [1])

    def test_no_qualified_trainers_is_an_empty_success(self):
        outcome = self.search.find_available_trainers(BOXING, at(10), 60)
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.value, [])

        outcome = self.search.find_available_trainers(999, at(10), 60)
        self.assertEqual(outcome.value, [])

    def test_keeps_candidate_enumeration_order(self):
        self.qualifications.by_service[YOGA] = [3, 1, 2]
        outcome = self.search.find_available_trainers(YOGA, at(10), 60)
        self.assertEqual(outcome.value, [3, 1, 2])

    def test_everyone_busy_is_an_empty_success(self):
        self.bookings.insert(make_booking(trainer_id=1, member_id=8, start=at(10)))
        self.bookings.insert(make_booking(trainer_id=2, member_id=9, start=at(10)))
        outcome = self.search.find_available_trainers(YOGA, at(10, 30), 30)
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.value, [])

    def test_invalid_duration_is_rejected(self):
        outcome = self.search.find_available_trainers(YOGA, at(10), 0)
        self.assertEqual(outcome.kind, ErrorKind.VALIDATION)


class TrainerSearchFaultTests(SimpleTestCase):
    def test_qualification_store_failure_aborts_search(self):
        search = TrainerEligibilitySearch(
            qualifications=BrokenStore(),
            availability=AvailabilityChecker(bookings=InMemoryBookingStore(), windows=InMemoryWindowStore()),
        )
        with self.assertLogs("scheduling.services.results", level="ERROR"):
            with self.assertRaises(StoreUnavailable) as ctx:
                search.find_available_trainers(YOGA, at(10), 60)
        self.assertEqual(ctx.exception.operation, "find_available_trainers")

    def test_candidate_check_failure_aborts_search(self):
        search = TrainerEligibilitySearch(
            qualifications=InMemoryQualificationStore({YOGA: [1, 2]}),
            availability=AvailabilityChecker(bookings=BrokenStore(), windows=BrokenStore()),
        )
        with self.assertLogs("scheduling.services.results", level="ERROR"):
            with self.assertRaises(StoreUnavailable):
                search.find_available_trainers(YOGA, at(10), 60)
