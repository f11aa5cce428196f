from rest_framework import serializers

from users.models import Employee

from .models import (
    AllowanceDeduction,
    ComponentTemplate,
    ComponentTemplateItem,
    Payroll,
    PayrollDetail,
)
from .services.enums import CalculationMethod
from .services.templates import create_template, update_template


class AllowanceDeductionSerializer(serializers.ModelSerializer):
    """Component serializer mirroring AllowanceDeduction.clean() rules"""
    component_type_display = serializers.CharField(
        source='get_component_type_display', read_only=True
    )
    calculation_method_display = serializers.CharField(
        source='get_calculation_method_display', read_only=True
    )

    class Meta:
        model = AllowanceDeduction
        fields = [
            'id', 'code', 'name', 'description', 'component_type',
            'component_type_display', 'calculation_method',
            'calculation_method_display', 'value', 'is_taxable', 'is_mandatory',
            'applies_to_all', 'minimum_salary_threshold', 'maximum_cap',
            'status', 'display_order', 'effective_from', 'effective_until',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {'code': {'required': False, 'allow_blank': True}}

    def validate(self, attrs):
        def current(name):
            return attrs.get(name, getattr(self.instance, name, None))

        errors = {}
        start, until = current('effective_from'), current('effective_until')
        if start and until and until < start:
            errors['effective_until'] = 'Effective until cannot be before effective from'

        method = current('calculation_method') or CalculationMethod.FIXED_AMOUNT.value
        value = current('value')
        if CalculationMethod(method).is_percentage and value is not None and value > 100:
            errors['value'] = 'Percentage cannot exceed 100'

        for name in ('minimum_salary_threshold', 'maximum_cap'):
            amount = current(name)
            if amount is not None and amount < 0:
                errors[name] = 'Must not be negative'

        if errors:
            raise serializers.ValidationError(errors)
        return attrs


class PayrollDetailSerializer(serializers.ModelSerializer):
    class Meta:
        model = PayrollDetail
        fields = [
            'id', 'component', 'component_name', 'component_type',
            'calculation_method', 'value', 'amount', 'is_taxable', 'position',
        ]
        read_only_fields = fields


class PayrollSerializer(serializers.ModelSerializer):
    """Payroll records are produced by the generator and read-only here"""
    employee_name = serializers.ReadOnlyField(source='employee.get_full_name')
    employee_code = serializers.ReadOnlyField(source='employee.employee_code')
    period = serializers.ReadOnlyField(source='period_display')
    details = PayrollDetailSerializer(many=True, read_only=True)

    class Meta:
        model = Payroll
        fields = [
            'id', 'payroll_number', 'employee', 'employee_name', 'employee_code',
            'month', 'year', 'period', 'basic_salary', 'total_allowances',
            'total_deductions', 'gross_salary', 'net_salary',
            'total_working_days', 'present_days', 'absent_days', 'late_days',
            'half_days', 'leave_days', 'paid_leaves', 'unpaid_leaves',
            'leave_deduction_amount', 'overtime_hours', 'overtime_amount',
            'status', 'payment_date', 'remarks', 'created_by', 'approved_by',
            'approved_at', 'paid_at', 'created_at', 'updated_at', 'details',
        ]
        read_only_fields = fields


class PayrollListSerializer(PayrollSerializer):
    class Meta(PayrollSerializer.Meta):
        fields = [
            'id', 'payroll_number', 'employee', 'employee_name', 'employee_code',
            'month', 'year', 'period', 'gross_salary', 'total_deductions',
            'net_salary', 'status', 'payment_date',
        ]
        read_only_fields = fields


class PayrollPeriodSerializer(serializers.Serializer):
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=2000, max_value=2100)


class GeneratePayrollSerializer(PayrollPeriodSerializer):
    employee = serializers.PrimaryKeyRelatedField(
        queryset=Employee.objects.all()
    )


class BulkGeneratePayrollSerializer(PayrollPeriodSerializer):
    employee_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1), required=False, allow_empty=False
    )


class CancelPayrollSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default='')


class CalculatePreviewSerializer(serializers.Serializer):
    """
    Preview input. With calculation_method and value only that single
    definition is valued; otherwise every active component is.
    """
    basic_salary = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    calculation_method = serializers.ChoiceField(
        choices=CalculationMethod.choices(), required=False
    )
    value = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False
    )

    def validate(self, attrs):
        if ('calculation_method' in attrs) != ('value' in attrs):
            raise serializers.ValidationError(
                'calculation_method and value must be given together'
            )
        return attrs


class ComponentTemplateItemSerializer(serializers.ModelSerializer):
    component_code = serializers.ReadOnlyField(source='component.code')
    component_name = serializers.ReadOnlyField(source='component.name')
    component_type = serializers.ReadOnlyField(source='component.component_type')
    effective_value = serializers.ReadOnlyField()

    class Meta:
        model = ComponentTemplateItem
        fields = [
            'id', 'component', 'component_code', 'component_name',
            'component_type', 'custom_value', 'effective_value', 'display_order',
        ]
        read_only_fields = ['id']
        extra_kwargs = {'display_order': {'required': False}}

    def validate(self, attrs):
        component = attrs.get('component')
        custom_value = attrs.get('custom_value')
        if (
            component is not None
            and custom_value is not None
            and CalculationMethod(component.calculation_method).is_percentage
            and custom_value > 100
        ):
            raise serializers.ValidationError({'custom_value': 'Percentage cannot exceed 100'})
        return attrs


class ComponentTemplateSerializer(serializers.ModelSerializer):
    industry_type_display = serializers.CharField(
        source='get_industry_type_display', read_only=True
    )
    employee_level_display = serializers.CharField(
        source='get_employee_level_display', read_only=True
    )
    items = ComponentTemplateItemSerializer(many=True, required=False)
    component_count = serializers.SerializerMethodField()

    class Meta:
        model = ComponentTemplate
        fields = [
            'id', 'name', 'description', 'industry_type', 'industry_type_display',
            'employee_level', 'employee_level_display', 'is_active',
            'usage_count', 'component_count', 'items', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'usage_count', 'created_at', 'updated_at']

    def get_component_count(self, obj):
        return len(obj.items.all())

    def validate_items(self, items):
        component_ids = [item['component'].pk for item in items]
        if len(component_ids) != len(set(component_ids)):
            raise serializers.ValidationError('A component can appear only once per template.')
        return items

    def validate(self, attrs):
        if self.instance is None and not attrs.get('items'):
            raise serializers.ValidationError(
                {'items': 'Select at least one component for this template.'}
            )
        return attrs

    def create(self, validated_data):
        return create_template(**validated_data)

    def update(self, instance, validated_data):
        return update_template(instance, **validated_data)


class ApplyTemplateSerializer(serializers.Serializer):
    employee = serializers.PrimaryKeyRelatedField(queryset=Employee.objects.all())
