"""Attendance Tracker package.

This package is organized by feature modules (users, employees, attendance,
notifications, reports) with a thin Flask controller layer on top of
service/repository layers backed by a key-value store.
"""
