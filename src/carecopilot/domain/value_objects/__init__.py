"""
Value objects package for domain layer.
"""

from .patient_id import PatientId

__all__ = ["PatientId"]
