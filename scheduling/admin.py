from django.contrib import admin

from .models import Booking, Member, Service, Trainer


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "price", "duration_minutes", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name",)
    list_editable = ("price", "duration_minutes", "is_active")


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "email", "is_active")
    search_fields = ("name", "email")


@admin.register(Trainer)
class TrainerAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "email", "is_active")
    search_fields = ("name", "email")


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    # Status changes should go through the API so the lifecycle rules apply.
    list_display = ("id", "member", "trainer", "service", "start_time", "duration_minutes", "status", "is_active")
    list_filter = ("status", "is_active", "service")
    search_fields = ("member__name", "trainer__name", "service__name")
    readonly_fields = ("status", "created_at", "updated_at")
