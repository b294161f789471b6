"""Employee Management package.

This package is organized by feature modules (users, attendance, timeoff)
with a thin Flask controller layer and service/repository layers over a
key-value storage adapter.
"""
