"""Campus Portal package.

This package is organized by feature modules (students, teachers, leaves, ...)
with a thin Flask controller layer over service/repository layers.
"""
