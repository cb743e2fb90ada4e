import os
from dataclasses import dataclass, field
from pathlib import Path


DEFAULT_BASE_URL = "https://www.swifttranslator.com/"
DEFAULT_LANGUAGE = "Sinhala"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


@dataclass
class HarnessConfig:
    base_url: str = DEFAULT_BASE_URL
    target_language: str = DEFAULT_LANGUAGE
    headless: bool = True
    verbose: bool = False
    # Timeout tiers: single element waits, output polling, whole scenario
    element_timeout_ms: int = 15_000
    poll_timeout_ms: int = 25_000
    poll_interval_ms: int = 250
    scenario_timeout_ms: int = 60_000
    type_delay_ms: int = 10
    ui_type_delay_ms: int = 15
    screenshot_delay_ms: int = 0
    runs_dir: Path = field(default_factory=lambda: Path("data/runs"))

    @property
    def language_value(self) -> str:
        """Machine value tried when a select rejects the display label."""
        return self.target_language.strip().lower()

    @classmethod
    def from_env(cls) -> "HarnessConfig":
        defaults = cls()
        return cls(
            base_url=os.environ.get("TRANSLATOR_BASE_URL", "") or defaults.base_url,
            target_language=os.environ.get("TRANSLATOR_LANGUAGE", "") or defaults.target_language,
            headless=_env_flag("HEADLESS", defaults.headless),
            verbose=_env_flag("VERBOSE", defaults.verbose),
            element_timeout_ms=_env_int("ELEMENT_TIMEOUT_MS", defaults.element_timeout_ms),
            poll_timeout_ms=_env_int("POLL_TIMEOUT_MS", defaults.poll_timeout_ms),
            poll_interval_ms=_env_int("POLL_INTERVAL_MS", defaults.poll_interval_ms),
            scenario_timeout_ms=_env_int("SCENARIO_TIMEOUT_MS", defaults.scenario_timeout_ms),
            type_delay_ms=_env_int("TYPE_DELAY_MS", defaults.type_delay_ms),
            ui_type_delay_ms=_env_int("UI_TYPE_DELAY_MS", defaults.ui_type_delay_ms),
            screenshot_delay_ms=_env_int("SCREENSHOT_DELAY_MS", defaults.screenshot_delay_ms),
            runs_dir=Path(os.environ.get("RUNS_DIR", "") or defaults.runs_dir),
        )
