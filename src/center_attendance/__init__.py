"""Center Attendance package.

This package is organized by feature modules (centers, sessions, attendance, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
