from django.contrib import admin

from .models import Leave, LeaveBalance


@admin.register(Leave)
class LeaveAdmin(admin.ModelAdmin):
    list_display = (
        "employee",
        "leave_type",
        "start_date",
        "end_date",
        "number_of_days",
        "status",
        "approved_by",
    )
    list_filter = ("status", "leave_type", "is_half_day")
    search_fields = ("employee__first_name", "employee__last_name", "employee__employee_code")
    readonly_fields = ("number_of_days", "applied_on", "updated_at", "action_date")


@admin.register(LeaveBalance)
class LeaveBalanceAdmin(admin.ModelAdmin):
    list_display = ("employee", "year", "casual_used", "sick_used", "annual_used", "maternity_used")
    list_filter = ("year",)
    search_fields = ("employee__first_name", "employee__last_name", "employee__employee_code")
