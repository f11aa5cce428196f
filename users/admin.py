from django.contrib import admin

from .models import Department, Designation, Employee


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "head_of_department", "status", "employee_count")
    list_filter = ("status",)
    search_fields = ("code", "name")

    def get_queryset(self, request):
        return super().get_queryset(request).with_employee_count()

    def employee_count(self, obj):
        return obj.employee_count

    employee_count.short_description = "Employees"
    employee_count.admin_order_field = "employee_count"


@admin.register(Designation)
class DesignationAdmin(admin.ModelAdmin):
    list_display = ("code", "title", "department", "level", "status")
    list_filter = ("status", "department")
    search_fields = ("code", "title")


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = (
        "employee_code",
        "first_name",
        "last_name",
        "department",
        "designation",
        "shift",
        "status",
        "role",
    )
    list_filter = ("status", "role", "department")
    search_fields = ("employee_code", "first_name", "last_name", "email")
    readonly_fields = ("created_at", "updated_at")
