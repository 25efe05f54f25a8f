"""
String utility functions for Caregiver Co-Pilot.
"""

import secrets
import string
from typing import Optional

from .datetime_utils import current_timestamp_ms

BASE36_ALPHABET = string.digits + string.ascii_lowercase


def random_base36(length: int = 7) -> str:
    """Random lowercase base36 string."""
    return "".join(secrets.choice(BASE36_ALPHABET) for _ in range(length))


def generate_patient_id(timestamp_ms: Optional[int] = None) -> str:
    """Generate a session-unique patient id: ``patient-<epoch ms>-<7 base36 chars>``."""
    ts = current_timestamp_ms() if timestamp_ms is None else timestamp_ms
    return f"patient-{ts}-{random_base36(7)}"
