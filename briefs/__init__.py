from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from briefs.risk import (
    RiskLevel,
    calculate_risk_score,
    get_likelihood_label,
    get_risk_level,
    get_severity_label,
    is_valid_rating,
)
from utils.constants import HAZARD_CATEGORY_LABELS


class HazardCategory(str, Enum):
    THERMAL = "thermal"
    CHEMICAL = "chemical"
    MECHANICAL = "mechanical"
    ELECTRICAL = "electrical"
    BIOLOGICAL = "biological"
    ERGONOMIC = "ergonomic"
    ENVIRONMENTAL = "environmental"
    PSYCHOLOGICAL = "psychological"


class _Record(BaseModel):
    # wire format is camelCase, python side is snake_case
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ParsedContext(_Record):
    actions: List[str] = []
    materials: List[str] = []
    tools: List[str] = []
    environment_factors: List[str] = []


class Hazard(_Record):
    category: str
    description: str = ""
    mechanism: str = ""

    @field_validator("category")
    @classmethod
    def _normalize_category(cls, v: str) -> str:
        return v.strip().lower()

    @property
    def known_category(self) -> Optional[HazardCategory]:
        try:
            return HazardCategory(self.category)
        except ValueError:
            return None

    @property
    def category_label(self) -> str:
        # categories outside the known set are shown as written
        known = self.known_category
        return HAZARD_CATEGORY_LABELS[known.value] if known else self.category


class RiskAssessment(_Record):
    severity: int
    likelihood: int
    overall_level: str
    rationale: str = ""

    @property
    def in_range(self) -> bool:
        return is_valid_rating(self.severity) and is_valid_rating(self.likelihood)

    @property
    def score(self) -> Optional[int]:
        if not self.in_range:
            return None
        return calculate_risk_score(self.severity, self.likelihood)

    @property
    def computed_level(self) -> Optional[RiskLevel]:
        score = self.score
        return get_risk_level(score) if score is not None else None

    @property
    def severity_label(self) -> str:
        return get_severity_label(self.severity)

    @property
    def likelihood_label(self) -> str:
        return get_likelihood_label(self.likelihood)


class Controls(_Record):
    elimination: List[str] = []
    substitution: List[str] = []
    engineering: List[str] = []
    administrative: List[str] = []
    ppe: List[str] = []


class Assessment(_Record):
    task_summary: str
    parsed_context: ParsedContext
    hazards: List[Hazard]
    risk_assessment: RiskAssessment
    controls: Controls
    emergency_actions: List[str]
    pre_task_checklist: List[str]
    ethical_note: str = ""
    additional_considerations: str = ""

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
