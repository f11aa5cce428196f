from django.conf import settings

DEFAULTS = {
    "BULK_TIMEOUT_SECONDS": 120,
    "BULK_MAX_WORKERS": 4,
    "PAYROLL_NUMBER_PREFIX": "PAY",
    "DEFAULT_LEAVE_ALLOWANCES": {
        "casual": 12,
        "sick": 10,
        "annual": 20,
        "maternity": 90,
    },
}


def payroll_setting(name):
    """Read one payroll policy value from settings.PAYROLL with a default"""
    if name not in DEFAULTS:
        raise KeyError(f"Unknown payroll setting: {name}")
    return getattr(settings, "PAYROLL", {}).get(name, DEFAULTS[name])
