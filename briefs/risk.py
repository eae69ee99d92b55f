"""
Risk scoring for the 5x5 severity x likelihood matrix.

Pure lookups only: score = severity * likelihood, bucketed into four bands.

    score 1-4    low
    score 5-9    moderate
    score 10-16  high
    score 17-25  critical

Over the full grid that gives 8 low, 7 moderate, 7 high and 3 critical
cells, which the colour legend in the UI mirrors.
"""

from enum import Enum
from numbers import Integral, Real
from typing import Dict, List, NamedTuple

from utils.errors import InvalidInputError

MIN_RATING = 1
MAX_RATING = 5
UNKNOWN_LABEL = "Unknown"


class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class ScaleEntry(NamedTuple):
    rating: int
    label: str
    description: str


SEVERITY_SCALE = [
    ScaleEntry(1, "Negligible", "Minor discomfort, no treatment needed"),
    ScaleEntry(2, "Minor", "First aid treatment required"),
    ScaleEntry(3, "Moderate", "Medical treatment required"),
    ScaleEntry(4, "Major", "Serious injury, hospitalization"),
    ScaleEntry(5, "Catastrophic", "Fatality or permanent disability"),
]

LIKELIHOOD_SCALE = [
    ScaleEntry(1, "Rare", "Highly unlikely to occur"),
    ScaleEntry(2, "Unlikely", "Could occur but not expected"),
    ScaleEntry(3, "Possible", "May occur occasionally"),
    ScaleEntry(4, "Likely", "Will probably occur"),
    ScaleEntry(5, "Almost Certain", "Expected to occur"),
]

RISK_LEVEL_INFO: Dict[RiskLevel, Dict[str, str]] = {
    RiskLevel.LOW: {
        "label": "Low",
        "range": "1-4",
        "description": "Acceptable risk with standard precautions",
    },
    RiskLevel.MODERATE: {
        "label": "Moderate",
        "range": "5-9",
        "description": "Requires additional controls and awareness",
    },
    RiskLevel.HIGH: {
        "label": "High",
        "range": "10-16",
        "description": "Significant risk requiring robust controls",
    },
    RiskLevel.CRITICAL: {
        "label": "Critical",
        "range": "17-25",
        "description": "Unacceptable risk without major controls or elimination",
    },
}

_SEVERITY_LABELS = {e.rating: e.label for e in SEVERITY_SCALE}
_LIKELIHOOD_LABELS = {e.rating: e.label for e in LIKELIHOOD_SCALE}


def is_valid_rating(value) -> bool:
    return (
        isinstance(value, Integral)
        and not isinstance(value, bool)
        and MIN_RATING <= value <= MAX_RATING
    )


def calculate_risk_score(severity: int, likelihood: int) -> int:
    """Return severity * likelihood; both factors must be integers in 1-5."""
    for name, value in (("severity", severity), ("likelihood", likelihood)):
        if not is_valid_rating(value):
            raise InvalidInputError(
                f"{name} must be an integer between {MIN_RATING} and {MAX_RATING}, got {value!r}"
            )
    return int(severity) * int(likelihood)


def get_risk_level(score: float) -> RiskLevel:
    # scores outside 1-25 fall into the nearest band
    if score <= 4:
        return RiskLevel.LOW
    if score <= 9:
        return RiskLevel.MODERATE
    if score <= 16:
        return RiskLevel.HIGH
    return RiskLevel.CRITICAL


def get_risk_level_from_factors(severity: int, likelihood: int) -> RiskLevel:
    return get_risk_level(calculate_risk_score(severity, likelihood))


def _label(table: Dict[int, str], rating) -> str:
    if isinstance(rating, bool) or not isinstance(rating, Real):
        return UNKNOWN_LABEL
    return table.get(rating, UNKNOWN_LABEL)


def get_severity_label(rating) -> str:
    return _label(_SEVERITY_LABELS, rating)


def get_likelihood_label(rating) -> str:
    return _label(_LIKELIHOOD_LABELS, rating)


def risk_matrix() -> List[List[dict]]:
    """
    The full grid as rows, severity 5 (top) down to 1, likelihood 1 to 5
    left to right.
    """
    rows = []
    for severity in range(MAX_RATING, MIN_RATING - 1, -1):
        row = []
        for likelihood in range(MIN_RATING, MAX_RATING + 1):
            score = calculate_risk_score(severity, likelihood)
            row.append({
                "severity": severity,
                "likelihood": likelihood,
                "score": score,
                "level": get_risk_level(score),
            })
        rows.append(row)
    return rows


def level_counts() -> Dict[RiskLevel, int]:
    counts = {level: 0 for level in RiskLevel}
    for row in risk_matrix():
        for cell in row:
            counts[cell["level"]] += 1
    return counts
