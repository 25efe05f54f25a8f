from .json_extraction import extract_json_candidate, extract_json_object, parse_json_object
from .normalization import (
    normalize_care_level,
    normalize_severity,
    parse_risk_analysis,
    parse_structured_data,
)
