"""
Enrollment module - Enrolled students and their guardians.
"""

from kinderadmin.modules.enrollment.models import Guardian, Student

__all__ = ["Guardian", "Student"]
