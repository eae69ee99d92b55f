import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to Python path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from briefs.analyst import analyze_task
from briefs.report import format_brief
from utils.config import Settings, load_settings
from utils.constants import DEFAULT_ENVIRONMENT, DEFAULT_EXPERTISE, environment_values, expertise_values
from utils.errors import RiskBriefError, user_message


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate a safety brief for one task.")
    parser.add_argument("task", help="free-text description of the task")
    parser.add_argument("--expertise", default=DEFAULT_EXPERTISE, choices=expertise_values())
    parser.add_argument("--environment", default=DEFAULT_ENVIRONMENT, choices=environment_values())
    parser.add_argument("--mock", action="store_true", help="use the sample brief, no API call")
    parser.add_argument("--json", action="store_true", help="print the assessment as JSON")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = Settings(mock=True) if args.mock else load_settings()
        assessment = analyze_task(args.task, args.expertise, args.environment, settings)
    except RiskBriefError as e:
        print(f"Error: {user_message(e)} ({e})", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(assessment.to_wire(), indent=2))
    else:
        print(format_brief(assessment))
    return 0


if __name__ == "__main__":
    sys.exit(main())
