from datetime import time
from decimal import Decimal

from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.test import TestCase
from rest_framework.test import APIClient

from scheduling.models import Service, Trainer

from .models import AvailabilityWindow, Qualification
from .serializers import AvailabilityWindowSerializer


class TrainerScheduleModelTests(TestCase):
    def setUp(self):
        self.trainer = Trainer.objects.create(name="Selin", email="selin@gym.example.com")
        self.service = Service.objects.create(name="Pilates", duration_minutes=50, price=Decimal("20.00"))

    def test_window_must_end_after_it_starts(self):
        window = AvailabilityWindow(trainer=self.trainer, day_of_week=2, start_time=time(12), end_time=time(12))
        with self.assertRaises(ValidationError):
            window.full_clean()

    def test_day_of_week_is_capped_at_sunday(self):
        window = AvailabilityWindow(trainer=self.trainer, day_of_week=7, start_time=time(9), end_time=time(12))
        with self.assertRaises(ValidationError):
            window.full_clean()

    def test_window_str_uses_day_name(self):
        window = AvailabilityWindow.objects.create(
            trainer=self.trainer, day_of_week=0, start_time=time(9), end_time=time(13)
        )
        self.assertEqual(str(window), "Selin: Sunday 09:00-13:00")

    def test_one_qualification_per_trainer_and_service(self):
        Qualification.objects.create(trainer=self.trainer, service=self.service, experience_years=4)
        with self.assertRaises(IntegrityError):
            Qualification.objects.create(trainer=self.trainer, service=self.service)


class AvailabilityWindowSerializerTests(TestCase):
    def setUp(self):
        self.trainer = Trainer.objects.create(name="Burak", email="burak@gym.example.com")

    def test_rejects_inverted_window(self):
        ser = AvailabilityWindowSerializer(data={
            "trainer": self.trainer.pk, "day_of_week": 1, "start_time": "17:00", "end_time": "09:00",
        })
        self.assertFalse(ser.is_valid())

    def test_partial_update_checks_against_stored_times(self):
        window = AvailabilityWindow.objects.create(
            trainer=self.trainer, day_of_week=1, start_time=time(9), end_time=time(12)
        )
        ser = AvailabilityWindowSerializer(window, data={"end_time": "08:30"}, partial=True)
        self.assertFalse(ser.is_valid())

        ser = AvailabilityWindowSerializer(window, data={"end_time": "14:00"}, partial=True)
        self.assertTrue(ser.is_valid(), ser.errors)


class ScheduleApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.trainer = Trainer.objects.create(name="Zeynep", email="zeynep@gym.example.com")
        self.payload = {"trainer": self.trainer.pk, "day_of_week": 4, "start_time": "07:00", "end_time": "11:00"}

    def test_schedule_endpoints_are_staff_only(self):
        self.assertEqual(self.client.get("/api/schedule/windows/").status_code, 403)
        self.assertEqual(self.client.post("/api/schedule/windows/", self.payload, format="json").status_code, 403)

    def test_staff_can_manage_windows(self):
        self.client.force_authenticate(User.objects.create_user(username="manager", password="x", is_staff=True))
        resp = self.client.post("/api/schedule/windows/", self.payload, format="json")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(AvailabilityWindow.objects.get().day_of_week, 4)
