from rest_framework import serializers

from .models import Department, Designation, Employee


class DepartmentSerializer(serializers.ModelSerializer):
    employee_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Department
        fields = [
            'id', 'code', 'name', 'description', 'head_of_department',
            'contact_number', 'email', 'status', 'established_date',
            'employee_count', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class DesignationSerializer(serializers.ModelSerializer):
    department_name = serializers.ReadOnlyField(source='department.name')
    employee_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Designation
        fields = [
            'id', 'code', 'title', 'description', 'department', 'department_name',
            'level', 'minimum_salary', 'maximum_salary', 'status',
            'employee_count', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate(self, attrs):
        minimum = attrs.get('minimum_salary', getattr(self.instance, 'minimum_salary', None))
        maximum = attrs.get('maximum_salary', getattr(self.instance, 'maximum_salary', None))
        if minimum is not None and maximum is not None and minimum > maximum:
            raise serializers.ValidationError({
                'maximum_salary': 'Maximum salary must not be below minimum salary'
            })
        return attrs


class EmployeeSerializer(serializers.ModelSerializer):
    """Employee serializer with cross-field validation"""
    full_name = serializers.ReadOnlyField(source='get_full_name')
    department_name = serializers.ReadOnlyField(source='department.name')
    designation_title = serializers.ReadOnlyField(source='designation.title')
    shift_name = serializers.ReadOnlyField(source='shift.name')

    class Meta:
        model = Employee
        fields = [
            'id', 'employee_code', 'first_name', 'last_name', 'full_name',
            'email', 'phone', 'department', 'department_name', 'designation',
            'designation_title', 'shift', 'shift_name', 'basic_salary',
            'joining_date', 'status', 'role', 'address', 'city', 'postal_code',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_basic_salary(self, value):
        if value < 0:
            raise serializers.ValidationError("Basic salary must be a positive number")
        return value

    def validate(self, attrs):
        department = attrs.get('department', getattr(self.instance, 'department', None))
        designation = attrs.get('designation', getattr(self.instance, 'designation', None))
        if department and designation and designation.department_id != department.pk:
            raise serializers.ValidationError({
                'designation': 'Designation belongs to a different department'
            })
        return attrs
