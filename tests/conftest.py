import sys
from pathlib import Path

import pytest

# Ensure the `src` folder is on sys.path when running pytest so imports like
# `from streams import ...` or `from strategies import ...` work without
# needing to install the package.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

TESTDATA = Path(__file__).resolve().parent / "testdata"


@pytest.fixture
def snapshots_csv() -> Path:
    return TESTDATA / "snapshots.csv"
