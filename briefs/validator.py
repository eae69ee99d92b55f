"""
Turns raw model output into an Assessment, or a named failure.

The JSON candidate is everything from the first "{" to the last "}". Prose
around a single object is fine; stray braces in that prose will break the
extraction and surface as a ParseError.
"""

import json
from typing import Any, List

from pydantic import ValidationError

from briefs import Assessment
from utils.errors import MissingFieldError, ParseError

REQUIRED_FIELDS = [
    "taskSummary",
    "parsedContext",
    "hazards",
    "riskAssessment",
    "controls",
    "emergencyActions",
    "preTaskChecklist",
]

CONTEXT_LISTS = ["actions", "materials", "tools", "environmentFactors"]
CONTROL_TIERS = ["elimination", "substitution", "engineering", "administrative", "ppe"]
OPTIONAL_NOTES = ["ethicalNote", "additionalConsiderations"]


def extract_json_candidate(text: Any) -> str:
    if not isinstance(text, str):
        raise ParseError("No valid JSON found in response")
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise ParseError("No valid JSON found in response")
    return text[start : end + 1]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _string_map(value: Any, keys: List[str]) -> dict:
    source = value if isinstance(value, dict) else {}
    return {k: _string_list(source.get(k)) for k in keys}


def _check_risk_assessment(value: Any) -> None:
    if (
        not isinstance(value, dict)
        or not _is_number(value.get("severity"))
        or not _is_number(value.get("likelihood"))
        or not value.get("overallLevel")
    ):
        raise MissingFieldError("riskAssessment", "Invalid riskAssessment structure")


def normalize(data: dict) -> dict:
    """Fill in defaults for optional lists and notes. Returns a new dict."""
    out = dict(data)
    out["parsedContext"] = _string_map(data.get("parsedContext"), CONTEXT_LISTS)
    out["controls"] = _string_map(data.get("controls"), CONTROL_TIERS)

    risk = dict(data["riskAssessment"])
    if not isinstance(risk.get("rationale"), str):
        risk["rationale"] = ""
    out["riskAssessment"] = risk

    for key in OPTIONAL_NOTES:
        if not isinstance(data.get(key), str):
            out[key] = ""
    return out


def parse_assessment_response(text: str) -> Assessment:
    candidate = extract_json_candidate(text)

    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        raise ParseError(f"Failed to parse JSON: {e}") from e

    # lone surrogates decode fine but cannot be rendered or re-encoded later
    try:
        json.dumps(data, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError as e:
        raise ParseError("Response contains text that is not valid UTF-8") from e

    for field in REQUIRED_FIELDS:
        if field not in data:
            raise MissingFieldError(field)

    _check_risk_assessment(data["riskAssessment"])

    try:
        return Assessment.model_validate(normalize(data))
    except ValidationError as e:
        first = e.errors()[0]
        path = ".".join(str(p) for p in first["loc"]) or "assessment"
        raise MissingFieldError(path, f"Invalid {path}: {first['msg']}") from e
