from briefs import Assessment
from briefs.risk import RISK_LEVEL_INFO
from utils.constants import CONTROL_HIERARCHY


def _bullets(lines, items, marker="-"):
    if not items:
        lines.append("  (none)")
    for item in items:
        lines.append(f"  {marker} {item}")


def format_brief(assessment: Assessment) -> str:
    """Format an assessment as a readable plain-text safety brief."""
    risk = assessment.risk_assessment
    lines = []
    lines.append("=" * 70)
    lines.append("SAFETY BRIEF")
    lines.append("=" * 70)
    lines.append(f"\n{assessment.task_summary}")

    lines.append("\n" + "-" * 70)
    lines.append("RISK RATING")
    lines.append("-" * 70)
    lines.append(f"Severity:   {risk.severity} ({risk.severity_label})")
    lines.append(f"Likelihood: {risk.likelihood} ({risk.likelihood_label})")
    if risk.score is not None:
        info = RISK_LEVEL_INFO[risk.computed_level]
        lines.append(f"Score:      {risk.score}/25 - {info['label']} ({info['range']})")
        lines.append(f"            {info['description']}")
    lines.append(f"Overall level reported: {risk.overall_level}")
    if risk.rationale:
        lines.append(f"\n{risk.rationale}")

    lines.append("\n" + "-" * 70)
    lines.append(f"HAZARDS ({len(assessment.hazards)})")
    lines.append("-" * 70)
    for rank, hazard in enumerate(assessment.hazards, 1):
        label = hazard.category_label
        lines.append(f"\n#{rank}. [{label}] {hazard.description}")
        if hazard.mechanism:
            lines.append(f"    {hazard.mechanism}")

    lines.append("\n" + "-" * 70)
    lines.append("CONTROLS (most to least effective)")
    lines.append("-" * 70)
    for tier in CONTROL_HIERARCHY:
        items = getattr(assessment.controls, tier["key"])
        lines.append(f"\n{tier['label']}:")
        _bullets(lines, items)

    lines.append("\n" + "-" * 70)
    lines.append("EMERGENCY ACTIONS")
    lines.append("-" * 70)
    for step, action in enumerate(assessment.emergency_actions, 1):
        lines.append(f"  {step}. {action}")

    lines.append("\n" + "-" * 70)
    lines.append("PRE-TASK CHECKLIST")
    lines.append("-" * 70)
    _bullets(lines, assessment.pre_task_checklist, marker="[ ]")

    for title, note in (
        ("ETHICAL NOTE", assessment.ethical_note),
        ("ADDITIONAL CONSIDERATIONS", assessment.additional_considerations),
    ):
        if note:
            lines.append("\n" + "-" * 70)
            lines.append(title)
            lines.append("-" * 70)
            lines.append(note)

    lines.append("\n" + "=" * 70)
    return "\n".join(lines)
