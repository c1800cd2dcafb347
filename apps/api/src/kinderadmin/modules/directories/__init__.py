"""
Directories module - Grades, guardian types and blood types.
"""

from kinderadmin.modules.directories.models import BloodType, Grade, GuardianType

__all__ = ["BloodType", "Grade", "GuardianType"]
