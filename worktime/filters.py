import django_filters

from .models import Attendance


class AttendanceFilter(django_filters.FilterSet):
    employee = django_filters.NumberFilter(field_name='employee__id')
    department = django_filters.NumberFilter(field_name='employee__department__id')
    date_from = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='date', lookup_expr='lte')
    month = django_filters.NumberFilter(field_name='date__month')
    year = django_filters.NumberFilter(field_name='date__year')
    is_late = django_filters.BooleanFilter()
    is_half_day = django_filters.BooleanFilter()
    has_overtime = django_filters.BooleanFilter(method='filter_has_overtime')

    def filter_has_overtime(self, queryset, name, value):
        if value is None:
            return queryset
        if value:
            return queryset.filter(overtime_hours__gt=0)
        return queryset.exclude(overtime_hours__gt=0)

    class Meta:
        model = Attendance
        fields = [
            'employee', 'department', 'date', 'date_from', 'date_to', 'month',
            'year', 'status', 'is_late', 'is_half_day', 'has_overtime',
        ]
