from enum import Enum

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from locator_resolver import (
    ControlOutcome,
    ResolutionTimeout,
    resolve_input_field,
    resolve_submit_button,
    switch_language,
)


class InputMode(Enum):
    ATOMIC = "atomic"
    INCREMENTAL = "incremental"


async def clear_input(field) -> None:
    await field.click()
    await field.fill("")


async def write_input(field, text: str, mode: InputMode = InputMode.ATOMIC, type_delay_ms: int = 10) -> None:
    if mode is InputMode.ATOMIC:
        await field.fill(text)
    else:
        await field.press_sequentially(text, delay=type_delay_ms)


async def click_submit_if_present(page, verbose: bool = False) -> ControlOutcome:
    """Click the translate button when one is shown.

    Auto-translating pages may hide or disable the button, so a failed
    click is reported rather than raised.
    """
    button = resolve_submit_button(page)
    try:
        if not await button.count():
            return ControlOutcome.ABSENT
        first = button.first
        if not await first.is_visible():
            return ControlOutcome.ABSENT
        await first.click()
    except PlaywrightError as e:
        if verbose:
            print(f"⚠️ Translate button present but not clickable: {e}")
        return ControlOutcome.FAILED
    if verbose:
        print("→ Clicked translate button")
    return ControlOutcome.USED


async def open_and_type(page, text: str, config, mode: InputMode = InputMode.ATOMIC, type_delay_ms: int | None = None) -> dict:
    """Load the entry page, pick the language and commit `text` into the input.

    Returns a short record of what happened to the optional controls.
    """
    verbose = config.verbose
    try:
        await page.goto(config.base_url, wait_until="domcontentloaded")
    except PlaywrightTimeoutError as e:
        raise ResolutionTimeout(f"Navigation to {config.base_url} timed out") from e
    switch = await switch_language(
        page,
        config.target_language,
        config.language_value,
        timeout_ms=config.element_timeout_ms,
        verbose=verbose,
    )
    field = await resolve_input_field(page, timeout_ms=config.element_timeout_ms)
    await clear_input(field)
    delay = config.type_delay_ms if type_delay_ms is None else type_delay_ms
    if verbose:
        print(f"→ Writing {len(text)} chars ({mode.value})")
    await write_input(field, text, mode=mode, type_delay_ms=delay)
    submit = await click_submit_if_present(page, verbose=verbose)
    return {
        "language_shape": switch.shape.value if switch.shape else None,
        "language": switch.outcome.value,
        "submit": submit.value,
    }
