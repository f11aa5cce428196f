import django_filters

from .models import AllowanceDeduction, ComponentTemplate, Payroll


class AllowanceDeductionFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(lookup_expr='icontains')

    class Meta:
        model = AllowanceDeduction
        fields = ['component_type', 'calculation_method', 'status', 'is_taxable', 'is_mandatory', 'name']


class PayrollFilter(django_filters.FilterSet):
    employee = django_filters.NumberFilter(field_name='employee__id')
    department = django_filters.NumberFilter(field_name='employee__department__id')
    min_net_salary = django_filters.NumberFilter(field_name='net_salary', lookup_expr='gte')
    max_net_salary = django_filters.NumberFilter(field_name='net_salary', lookup_expr='lte')

    class Meta:
        model = Payroll
        fields = ['employee', 'department', 'month', 'year', 'status', 'min_net_salary', 'max_net_salary']


class ComponentTemplateFilter(django_filters.FilterSet):
    class Meta:
        model = ComponentTemplate
        fields = ['industry_type', 'employee_level', 'is_active']
