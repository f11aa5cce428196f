from django.contrib import admin

from .models import Attendance, Shift


@admin.register(Shift)
class ShiftAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "name",
        "start_time",
        "end_time",
        "grace_period_minutes",
        "is_night_shift",
        "status",
    )
    list_filter = ("status", "is_night_shift")
    search_fields = ("code", "name")


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = (
        "employee",
        "date",
        "check_in_time",
        "check_out_time",
        "status",
        "is_late",
        "total_hours",
        "overtime_hours",
    )
    list_filter = ("status", "is_late", "is_half_day", "date")
    search_fields = ("employee__first_name", "employee__last_name", "employee__employee_code")
    readonly_fields = (
        "is_late",
        "late_by_minutes",
        "is_half_day",
        "total_hours",
        "overtime_hours",
        "created_at",
        "updated_at",
    )
    date_hierarchy = "date"
