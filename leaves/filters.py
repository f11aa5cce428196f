import django_filters

from .models import Leave


class LeaveFilter(django_filters.FilterSet):
    employee = django_filters.NumberFilter(field_name='employee__id')
    date_from = django_filters.DateFilter(field_name='start_date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='start_date', lookup_expr='lte')
    month = django_filters.NumberFilter(field_name='start_date__month')
    year = django_filters.NumberFilter(field_name='start_date__year')

    class Meta:
        model = Leave
        fields = ['employee', 'leave_type', 'status', 'is_half_day', 'date_from', 'date_to', 'month', 'year']
