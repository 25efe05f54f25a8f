"""
Utility functions for Caregiver Co-Pilot.
"""

from .datetime_utils import (
    current_timestamp_ms,
    format_card_date,
    format_visit_date,
    from_timestamp_ms,
)
from .string_utils import generate_patient_id, random_base36

__all__ = [
    "current_timestamp_ms",
    "format_card_date",
    "format_visit_date",
    "from_timestamp_ms",
    "generate_patient_id",
    "random_base36",
]
