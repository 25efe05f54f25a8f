"""
Normalization of structuring and risk-analysis stage output.

Malformed model output never raises here; it degrades to a well-formed
empty value.
"""

from typing import Any

from ...domain.entities import RiskAnalysis, StructuredVisitData
from ...domain.enums import CareLevel, Severity
from .json_extraction import extract_json_object


def normalize_severity(value: Any) -> Severity:
    """medium/moderate -> medium, high/urgent -> high, anything else -> low."""
    return Severity.parse(value)


def normalize_care_level(value: Any) -> CareLevel:
    return CareLevel.parse(value)


def parse_structured_data(content: str) -> StructuredVisitData:
    """Parse the structuring stage completion into StructuredVisitData."""
    parsed = extract_json_object(content)
    if parsed is None:
        return StructuredVisitData.empty()
    return StructuredVisitData.from_dict(parsed)


def parse_risk_analysis(content: str) -> RiskAnalysis:
    """Parse the risk stage completion into RiskAnalysis."""
    parsed = extract_json_object(content)
    if parsed is None:
        return RiskAnalysis()
    return RiskAnalysis.from_dict(parsed)
