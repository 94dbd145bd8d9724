"""Halaqat administration package.

This package is organized by feature modules (staff, guardians, students, ...)
with a thin Flask controller layer and service/repository layers.
"""
