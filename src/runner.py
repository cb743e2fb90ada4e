import asyncio
import re
import time
from enum import Enum
from pathlib import Path

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from input_driver import InputMode, open_and_type
from locator_resolver import ResolutionTimeout, describe_controls
from output_reader import get_output_text
from polling import (
    AssertionTimeout,
    PollResult,
    PollState,
    expect_keyword_absent,
    expect_keyword_present,
)
from scenario_cases import Check, ScenarioCase


class FailureKind(Enum):
    RESOLUTION_TIMEOUT = "resolution_timeout"
    ASSERTION_TIMEOUT = "assertion_timeout"


def classify_failure(error: BaseException) -> FailureKind:
    if isinstance(error, AssertionTimeout):
        return FailureKind.ASSERTION_TIMEOUT
    return FailureKind.RESOLUTION_TIMEOUT


def sanitize_for_filename(text: str) -> str:
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[-\s]+", "_", text)
    return text.strip("_").lower()[:100]


def get_screenshot_path(screenshots_dir: Path, case_title: str, action_type: str, extension: str = "png") -> Path:
    filename = f"test_{sanitize_for_filename(case_title)}_{sanitize_for_filename(action_type)}.{extension}"
    return screenshots_dir / filename


async def check_snapshot(page, keyword: str, timeout_ms: int) -> PollResult:
    """Single read: output must already be non-empty and contain `keyword`."""
    loop = asyncio.get_running_loop()
    start = loop.time()
    out = await get_output_text(page, timeout_ms=timeout_ms)
    elapsed_ms = int((loop.time() - start) * 1000)
    if not out:
        raise AssertionTimeout(f"Expected non-empty output containing: {keyword} (output was empty)")
    if keyword not in out:
        raise AssertionTimeout(f"Expected output to contain: {keyword} (observed: {out[:200]!r})")
    return PollResult(PollState.SUCCEEDED, 1, out, elapsed_ms)


async def run_scenario(page, case: ScenarioCase, config) -> dict:
    """Drive one scenario on an already-open page and assert on its output."""
    suite = case.suite_def
    verbose = config.verbose
    delay = config.ui_type_delay_ms if suite.mode is InputMode.INCREMENTAL else config.type_delay_ms
    controls = await open_and_type(page, case.input, config, mode=suite.mode, type_delay_ms=delay)

    async def read() -> str:
        return await get_output_text(page, timeout_ms=config.element_timeout_ms)

    if suite.check is Check.PRESENT:
        result = await expect_keyword_present(
            read, case.anchor, timeout_ms=config.poll_timeout_ms, interval_ms=config.poll_interval_ms, verbose=verbose
        )
    elif suite.check is Check.ABSENT:
        result = await expect_keyword_absent(
            read, case.anchor, timeout_ms=config.poll_timeout_ms, interval_ms=config.poll_interval_ms, verbose=verbose
        )
    else:
        result = await check_snapshot(page, case.anchor, config.element_timeout_ms)
    return {
        "controls": controls,
        "poll": {
            "state": result.state.value,
            "samples": result.samples,
            "elapsed_ms": result.elapsed_ms,
            "last_observed": result.last_observed,
        },
    }


async def _capture_failure(page, case: ScenarioCase, kind: FailureKind, screenshots_dir: Path, config) -> tuple[str, dict]:
    screenshot = ""
    controls: dict = {}
    try:
        controls = await describe_controls(page)
    except PlaywrightError as e:
        if config.verbose:
            print(f"⚠️ Could not collect control inventory: {e}")
    try:
        if config.screenshot_delay_ms > 0:
            await page.wait_for_timeout(config.screenshot_delay_ms)
        shot = get_screenshot_path(screenshots_dir, case.title, kind.value)
        await page.screenshot(path=str(shot), full_page=True)
        # Relative to the run directory, where report.html is written
        screenshot = f"{screenshots_dir.name}/{shot.name}"
        if config.verbose:
            print(f"📸 Failure screenshot saved: {shot.name}")
    except PlaywrightError as e:
        if config.verbose:
            print(f"⚠️ Could not save failure screenshot: {e}")
    return screenshot, controls


async def run_isolated(browser, case: ScenarioCase, config, screenshots_dir: Path) -> dict:
    """Run one case in its own browser context, bounded by the scenario ceiling."""
    if config.verbose:
        print(f"\n===== Running Test: {case.title} =====")
        print(f"→ Anchor: {case.anchor!r}")
    status = "passed"
    error = ""
    failure_kind = None
    screenshot = ""
    diagnostics: dict = {}
    details: dict = {}
    started = time.monotonic()
    context = None
    page = None
    failure = None
    try:
        context = await browser.new_context(viewport={"width": 1366, "height": 900})
        page = await context.new_page()
        details = await asyncio.wait_for(
            run_scenario(page, case, config), timeout=config.scenario_timeout_ms / 1000
        )
    except asyncio.TimeoutError:
        failure = ResolutionTimeout(f"Scenario exceeded {config.scenario_timeout_ms}ms")
    except (AssertionError, PlaywrightError) as e:
        failure = e
    try:
        if failure is not None:
            status = "failed"
            error = str(failure)
            kind = classify_failure(failure)
            failure_kind = kind.value
            current_url = page.url if page is not None else ""
            print(f"✖ Test failed: {case.title} — {error} (url={current_url})")
            if page is not None:
                screenshot, diagnostics = await _capture_failure(page, case, kind, screenshots_dir, config)
    finally:
        if context is not None:
            try:
                await context.close()
            except PlaywrightError as e:
                if config.verbose:
                    print(f"⚠️ Could not close browser context: {e}")

    if status == "passed":
        print(f"✓ Passed: {case.title}")
    else:
        err_excerpt = error if len(error) < 300 else (error[:297] + "...")
        print(f"✖ Failed: {case.title} — {err_excerpt}")
    return {
        "id": case.id,
        "name": case.title,
        "suite": case.suite,
        "anchor": case.anchor,
        "status": status,
        "failure_kind": failure_kind,
        "error": error,
        "screenshot": screenshot,
        "duration_ms": int((time.monotonic() - started) * 1000),
        "details": details,
        "diagnostics": diagnostics,
    }


async def run_test_suite(cases: list[ScenarioCase], config, run_dir: Path) -> dict:
    screenshots_dir = run_dir / "screenshots"
    screenshots_dir.mkdir(parents=True, exist_ok=True)
    results = []
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=config.headless)
        try:
            for case in cases:
                results.append(await run_isolated(browser, case, config, screenshots_dir))
        finally:
            await browser.close()
    return {"tests": results}
