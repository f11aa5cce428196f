# users/permissions.py
from rest_framework.permissions import SAFE_METHODS, BasePermission


def get_user_role(user):
    """
    Role of the employee record linked to the user, or None.

    Superusers are treated as admins even without an employee record.
    """
    if not user or not user.is_authenticated:
        return None
    if user.is_superuser:
        return "admin"
    employee = user.employees.first()
    return employee.role if employee else None


class IsEmployeeOrAbove(BasePermission):
    """
    Permission for employee role and above
    """

    message = "Employee access required"

    def has_permission(self, request, view):
        return get_user_role(request.user) in ["employee", "hr", "accountant", "admin"]


class IsHROrAbove(BasePermission):
    """
    Permission for HR staff, accountants and admins (leave decisions)
    """

    message = "HR, Accountant or Admin access required"

    def has_permission(self, request, view):
        return get_user_role(request.user) in ["hr", "accountant", "admin"]


class IsAccountantOrAdmin(BasePermission):
    """
    Permission for accountant and admin roles only
    """

    message = "Accountant or Admin access required"

    def has_permission(self, request, view):
        return get_user_role(request.user) in ["accountant", "admin"]


class ReadOnlyOrHR(BasePermission):
    """
    Any employee may read; writes to master data need HR or above
    """

    message = "HR, Accountant or Admin access required for changes"

    def has_permission(self, request, view):
        role = get_user_role(request.user)
        if request.method in SAFE_METHODS:
            return role in ["employee", "hr", "accountant", "admin"]
        return role in ["hr", "accountant", "admin"]


class ReadOnlyOrAccountant(BasePermission):
    """
    Any employee may read; writes need accountant or admin
    """

    message = "Accountant or Admin access required for changes"

    def has_permission(self, request, view):
        role = get_user_role(request.user)
        if request.method in SAFE_METHODS:
            return role in ["employee", "hr", "accountant", "admin"]
        return role in ["accountant", "admin"]
