import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from gedcom_validator.dates import GedcomDate  # noqa: E402


@pytest.fixture
def now() -> GedcomDate:
    """Fixed reference date so ages and future-date checks are stable."""
    return GedcomDate(2020, 1, 1)
