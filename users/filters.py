import django_filters

from .models import Employee


class EmployeeFilter(django_filters.FilterSet):
    department = django_filters.NumberFilter(field_name='department__id')
    designation = django_filters.NumberFilter(field_name='designation__id')
    shift = django_filters.NumberFilter(field_name='shift__id')
    has_shift = django_filters.BooleanFilter(field_name='shift', lookup_expr='isnull', exclude=True)
    joined_after = django_filters.DateFilter(field_name='joining_date', lookup_expr='gte')

    class Meta:
        model = Employee
        fields = ['department', 'designation', 'shift', 'has_shift', 'status', 'role', 'joined_after']
