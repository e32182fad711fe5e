# trainers/admin.py
from django.contrib import admin

from .models import AvailabilityWindow, Qualification


@admin.register(AvailabilityWindow)
class AvailabilityWindowAdmin(admin.ModelAdmin):
    list_display = ("trainer", "day_of_week", "start_time", "end_time", "is_active")
    list_filter = ("trainer", "day_of_week", "is_active")
    search_fields = ("trainer__name",)


@admin.register(Qualification)
class QualificationAdmin(admin.ModelAdmin):
    list_display = ("trainer", "service", "experience_years", "certificate_name", "is_active")
    list_filter = ("service", "is_active")
    search_fields = ("trainer__name", "service__name")
