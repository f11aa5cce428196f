from django.contrib import admin

from .models import (
    AllowanceDeduction,
    ComponentTemplate,
    ComponentTemplateItem,
    Payroll,
    PayrollDetail,
)


@admin.register(AllowanceDeduction)
class AllowanceDeductionAdmin(admin.ModelAdmin):
    list_display = ('code', 'name', 'component_type', 'calculation_method', 'value', 'is_taxable', 'status', 'display_order')
    list_filter = ('component_type', 'calculation_method', 'status', 'is_taxable')
    search_fields = ('code', 'name')
    ordering = ('display_order', 'name')
    readonly_fields = ('created_at', 'updated_at')


class PayrollDetailInline(admin.TabularInline):
    model = PayrollDetail
    extra = 0
    can_delete = False
    readonly_fields = ('component', 'component_name', 'component_type', 'calculation_method', 'value', 'amount', 'is_taxable', 'position')

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Payroll)
class PayrollAdmin(admin.ModelAdmin):
    list_display = ('payroll_number', 'employee', 'period_display', 'gross_salary', 'total_deductions', 'net_salary', 'status')
    list_filter = ('status', 'year', 'month')
    search_fields = ('payroll_number', 'employee__employee_code', 'employee__last_name')
    readonly_fields = ('created_at', 'updated_at', 'approved_at', 'paid_at')
    inlines = [PayrollDetailInline]

    fieldsets = (
        ('Period', {
            'fields': ('payroll_number', 'employee', ('month', 'year'), 'status', 'payment_date')
        }),
        ('Amounts', {
            'fields': (
                'basic_salary', 'total_allowances', 'total_deductions',
                'gross_salary', 'net_salary', 'leave_deduction_amount',
                ('overtime_hours', 'overtime_amount'),
            )
        }),
        ('Attendance', {
            'fields': (
                'total_working_days', ('present_days', 'absent_days', 'late_days', 'half_days'),
                ('leave_days', 'paid_leaves', 'unpaid_leaves'),
            )
        }),
        ('Audit', {
            'fields': ('remarks', 'created_by', 'approved_by', 'approved_at', 'paid_at', ('created_at', 'updated_at')),
            'classes': ('collapse',),
        }),
    )

    def period_display(self, obj):
        return obj.period_display
    period_display.short_description = 'Period'


class ComponentTemplateItemInline(admin.TabularInline):
    model = ComponentTemplateItem
    extra = 1
    autocomplete_fields = ('component',)


@admin.register(ComponentTemplate)
class ComponentTemplateAdmin(admin.ModelAdmin):
    list_display = ('name', 'industry_type', 'employee_level', 'is_active', 'usage_count', 'created_at')
    list_filter = ('industry_type', 'employee_level', 'is_active')
    search_fields = ('name', 'description')
    readonly_fields = ('usage_count', 'created_at', 'updated_at')
    inlines = [ComponentTemplateItemInline]
