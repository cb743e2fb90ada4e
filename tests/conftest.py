import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from harness_config import HarnessConfig  # noqa: E402


@pytest.fixture
def fast_config(tmp_path) -> HarnessConfig:
    return HarnessConfig(
        base_url="https://translator.test/",
        element_timeout_ms=50,
        poll_timeout_ms=200,
        poll_interval_ms=10,
        scenario_timeout_ms=2_000,
        type_delay_ms=0,
        ui_type_delay_ms=0,
        runs_dir=tmp_path / "runs",
    )
