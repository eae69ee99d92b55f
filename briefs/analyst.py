import logging

from briefs import Assessment
from briefs.mock import mock_assessment
from briefs.validator import parse_assessment_response
from utils.config import Settings
from utils.constants import (
    EXPERTISE_LEVELS,
    MAX_TASK_LENGTH,
    environment_values,
    expertise_values,
)
from utils.errors import InvalidInputError
from utils.llm import call_llm
from utils.prompts import SYSTEM_PROMPT, USER_PROMPT_TEMPLATE

logger = logging.getLogger(__name__)


def validate_inputs(task: str, expertise: str, environment: str) -> str:
    """Check the three form values and return the stripped task text."""
    task = (task or "").strip()
    if not task:
        raise InvalidInputError("Please provide a task description")
    if len(task) > MAX_TASK_LENGTH:
        raise InvalidInputError(
            f"Task description must be {MAX_TASK_LENGTH} characters or fewer"
        )
    if expertise not in expertise_values():
        raise InvalidInputError(f"Unknown expertise level: {expertise!r}")
    if environment not in environment_values():
        raise InvalidInputError(f"Unknown environment: {environment!r}")
    return task


def build_user_prompt(task: str, expertise: str, environment: str) -> str:
    legend = "\n".join(f"- {e['value']}: {e['description']}" for e in EXPERTISE_LEVELS)
    return USER_PROMPT_TEMPLATE.format(
        task=task,
        expertise=expertise,
        expertise_legend=legend,
        environment=environment,
    )


def analyze_task(task: str, expertise: str, environment: str, settings: Settings) -> Assessment:
    task = validate_inputs(task, expertise, environment)

    if settings.mock:
        logger.info("Demo mode: returning sample assessment")
        return mock_assessment()

    prompt = build_user_prompt(task, expertise, environment)
    raw = call_llm(SYSTEM_PROMPT, prompt, settings)
    assessment = parse_assessment_response(raw)

    logger.info(
        "Analysis complete (task_chars=%d, hazards=%d, level=%s)",
        len(task),
        len(assessment.hazards),
        assessment.risk_assessment.overall_level,
    )
    return assessment
