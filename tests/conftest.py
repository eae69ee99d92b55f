import copy
import json
import sys
from pathlib import Path

# Add project root to Python path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from briefs.mock import MOCK_ASSESSMENT
from utils.config import Settings


@pytest.fixture()
def payload():
    """A complete assessment object as the model would send it."""
    return copy.deepcopy(MOCK_ASSESSMENT)


@pytest.fixture()
def payload_text(payload):
    return json.dumps(payload)


@pytest.fixture()
def settings():
    return Settings(api_key="sk-test", secret_key="test-secret")


@pytest.fixture()
def mock_settings():
    return Settings(mock=True, secret_key="test-secret")
