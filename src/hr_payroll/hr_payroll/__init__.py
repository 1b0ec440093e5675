"""HR Payroll package.

This package is organized by feature modules (attendance, settings, payroll, ...)
with a thin Flask controller layer and SOLID service/repository layers.
"""
