# Payroll services package
#
# Pure calculators (valuation, leave_aggregator, payroll_service.compute_payroll)
# take plain contracts from .contracts; the *_payroll functions in
# payroll_service and bulk.bulk_service own the database side.
