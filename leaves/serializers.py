from rest_framework import serializers

from .models import Leave, LeaveBalance


class LeaveSerializer(serializers.ModelSerializer):
    employee_name = serializers.ReadOnlyField(source='employee.get_full_name')
    employee_code = serializers.ReadOnlyField(source='employee.employee_code')
    is_paid = serializers.ReadOnlyField()

    class Meta:
        model = Leave
        fields = [
            'id', 'employee', 'employee_name', 'employee_code', 'leave_type',
            'start_date', 'end_date', 'is_half_day', 'number_of_days', 'is_paid',
            'reason', 'status', 'admin_remarks', 'approved_by', 'action_date',
            'applied_on', 'updated_at',
        ]
        read_only_fields = [
            'id', 'number_of_days', 'status', 'admin_remarks', 'approved_by',
            'action_date', 'applied_on', 'updated_at',
        ]

    def validate(self, attrs):
        def current(name):
            return attrs.get(name, getattr(self.instance, name, None))

        start, end = current('start_date'), current('end_date')
        if start and end:
            if end < start:
                raise serializers.ValidationError({
                    'end_date': 'End date must be after or equal to start date.'
                })
            if current('is_half_day') and start != end:
                raise serializers.ValidationError({
                    'is_half_day': 'A half-day leave must start and end on the same day.'
                })
        return attrs


class LeaveDecisionSerializer(serializers.Serializer):
    admin_remarks = serializers.CharField(required=False, allow_blank=True, default='')


class LeaveBalanceSerializer(serializers.ModelSerializer):
    balances = serializers.SerializerMethodField()

    class Meta:
        model = LeaveBalance
        fields = ['id', 'employee', 'year', 'balances', 'updated_at']

    def get_balances(self, obj):
        return {
            leave_type: {key: str(value) for key, value in values.items()}
            for leave_type, values in obj.as_dict().items()
        }
