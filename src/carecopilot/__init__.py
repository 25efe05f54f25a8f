"""
Caregiver Co-Pilot: AI-assisted caregiver visit analysis.

Turns free-text or voice visit notes into structured clinical insight
through a staged LLM pipeline, and derives trends, confidence, escalation
actions and export text from a patient's visit history.
"""

__version__ = "0.1.0"
__author__ = "Caregiver Co-Pilot Team"
__description__ = "AI-assisted caregiver visit analysis service"
