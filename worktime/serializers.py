from rest_framework import serializers

from users.models import Employee

from .models import Attendance, Shift


class ShiftSerializer(serializers.ModelSerializer):
    """Shift serializer mirroring Shift.clean() range rules"""
    assigned_employees = serializers.IntegerField(read_only=True)

    class Meta:
        model = Shift
        fields = [
            'id', 'code', 'name', 'description', 'start_time', 'end_time',
            'break_duration_minutes', 'grace_period_minutes',
            'late_mark_after_minutes', 'half_day_hours', 'full_day_hours',
            'is_night_shift', 'status', 'assigned_employees',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate(self, attrs):
        def current(name):
            return attrs.get(name, getattr(self.instance, name, None))

        start, end = current('start_time'), current('end_time')
        if start and end and not current('is_night_shift') and end <= start:
            raise serializers.ValidationError({
                'end_time': 'End time must be after start time unless it is a night shift'
            })

        half_day, full_day = current('half_day_hours'), current('full_day_hours')
        if half_day is not None and full_day is not None and half_day > full_day:
            raise serializers.ValidationError({
                'half_day_hours': 'Half-day hours cannot exceed full-day hours'
            })
        return attrs


class AttendanceSerializer(serializers.ModelSerializer):
    """Attendance serializer; derived metrics are read-only"""
    employee_name = serializers.ReadOnlyField(source='employee.get_full_name')
    employee_code = serializers.ReadOnlyField(source='employee.employee_code')
    shift_name = serializers.ReadOnlyField(source='employee.shift.name')

    class Meta:
        model = Attendance
        fields = [
            'id', 'employee', 'employee_name', 'employee_code', 'shift_name',
            'date', 'check_in_time', 'check_out_time', 'status', 'is_late',
            'late_by_minutes', 'is_half_day', 'total_hours', 'overtime_hours',
            'remarks', 'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'is_late', 'late_by_minutes', 'is_half_day', 'total_hours',
            'overtime_hours', 'created_at', 'updated_at',
        ]

    def validate(self, attrs):
        def current(name):
            return attrs.get(name, getattr(self.instance, name, None))

        check_in = current('check_in_time')
        check_out = current('check_out_time')
        status = current('status') or Attendance.Status.PRESENT

        if check_out and not check_in:
            raise serializers.ValidationError({
                'check_out_time': 'Check-out requires a check-in time'
            })
        if status in Attendance.PUNCHED_STATUSES and not check_in:
            raise serializers.ValidationError({
                'check_in_time': 'Check-in time is required for present employees'
            })

        employee = current('employee')
        date = current('date')
        if employee and date:
            duplicate = Attendance.objects.filter(employee=employee, date=date)
            if self.instance:
                duplicate = duplicate.exclude(pk=self.instance.pk)
            if duplicate.exists():
                raise serializers.ValidationError(
                    'Attendance for this employee and date already exists'
                )
        return attrs


class BulkAttendanceSerializer(serializers.Serializer):
    """Mark the same attendance for several employees on one date"""
    date = serializers.DateField()
    status = serializers.ChoiceField(
        choices=Attendance.Status.choices, default=Attendance.Status.PRESENT
    )
    check_in_time = serializers.TimeField(required=False, allow_null=True)
    check_out_time = serializers.TimeField(required=False, allow_null=True)
    employee_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1), allow_empty=False
    )
    remarks = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_employee_ids(self, value):
        ids = list(dict.fromkeys(value))
        found = set(
            Employee.objects.active().filter(pk__in=ids).values_list('pk', flat=True)
        )
        missing = [pk for pk in ids if pk not in found]
        if missing:
            raise serializers.ValidationError(
                f'Unknown or inactive employees: {missing}'
            )
        return ids

    def validate(self, attrs):
        if attrs.get('check_out_time') and not attrs.get('check_in_time'):
            raise serializers.ValidationError({
                'check_out_time': 'Check-out requires a check-in time'
            })
        if attrs['status'] in Attendance.PUNCHED_STATUSES and not attrs.get('check_in_time'):
            raise serializers.ValidationError({
                'check_in_time': 'Check-in time is required for present employees'
            })
        return attrs
