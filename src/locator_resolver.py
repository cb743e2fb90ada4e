import re
from enum import Enum
from typing import NamedTuple

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError


TRANSLATE_BUTTON_NAME = re.compile(r"translate", re.I)


class ResolutionTimeout(AssertionError):
    """A required element did not become usable within its bound."""


class ControlOutcome(Enum):
    USED = "used"
    ABSENT = "absent"
    FAILED = "failed"


class SwitcherShape(Enum):
    NATIVE_SELECT = "native_select"
    COMBOBOX = "combobox"


class SwitchResult(NamedTuple):
    shape: SwitcherShape | None
    outcome: ControlOutcome


def exact_label(label: str) -> re.Pattern:
    return re.compile(rf"^{re.escape(label)}$")


async def _select_native(page, label: str, value: str, timeout_ms: int, verbose: bool = False) -> ControlOutcome | None:
    select = (
        page.locator("select")
        .filter(has=page.locator("option", has_text=exact_label(label)))
        .first
    )
    if not await select.count():
        return None
    try:
        await select.wait_for(state="visible", timeout=timeout_ms)
    except PlaywrightTimeoutError as e:
        if verbose:
            print(f"→ <select> with {label!r} never became visible: {e}")
        return ControlOutcome.FAILED
    try:
        await select.select_option(label=label, timeout=timeout_ms)
        return ControlOutcome.USED
    except PlaywrightError as e:
        if verbose:
            print(f"→ select by label {label!r} rejected ({e}), retrying by value {value!r}")
    try:
        await select.select_option(value, timeout=timeout_ms)
    except PlaywrightError as e:
        if verbose:
            print(f"→ select by value {value!r} failed: {e}")
        return ControlOutcome.FAILED
    return ControlOutcome.USED


async def _select_combobox(page, label: str, value: str, timeout_ms: int, verbose: bool = False) -> ControlOutcome | None:
    trigger = page.get_by_role("combobox").first
    if not await trigger.count():
        return None
    try:
        await trigger.click(timeout=timeout_ms)
        option = page.get_by_role("option", name=exact_label(label)).first
        await option.click(timeout=timeout_ms)
    except PlaywrightError as e:
        if verbose:
            print(f"→ combobox option {label!r} could not be chosen: {e}")
        return ControlOutcome.FAILED
    return ControlOutcome.USED


# Tried in order; the first shape present on the page wins
LANGUAGE_STRATEGIES = (
    (SwitcherShape.NATIVE_SELECT, _select_native),
    (SwitcherShape.COMBOBOX, _select_combobox),
)


async def switch_language(page, label: str, value: str | None = None, timeout_ms: int = 15_000, verbose: bool = False) -> SwitchResult:
    """Select the target language on whichever switcher the page renders.

    No switcher at all is not an error: the page is assumed to already be in
    the target language. A switcher that is present but unusable raises
    ResolutionTimeout.
    """
    value = value if value is not None else label.strip().lower()
    for shape, strategy in LANGUAGE_STRATEGIES:
        outcome = await strategy(page, label, value, timeout_ms, verbose=verbose)
        if outcome is None:
            continue
        if outcome is ControlOutcome.FAILED:
            raise ResolutionTimeout(f"Language switcher ({shape.value}) present but {label!r} could not be selected")
        if verbose:
            print(f"✓ Language set to {label!r} via {shape.value}")
        return SwitchResult(shape, outcome)
    if verbose:
        print("→ No language switcher found; assuming default language")
    return SwitchResult(None, ControlOutcome.ABSENT)


async def resolve_input_field(page, timeout_ms: int = 15_000):
    """Return the primary input: the first textarea, once visible."""
    field = page.locator("textarea").first
    try:
        await field.wait_for(state="visible", timeout=timeout_ms)
    except PlaywrightTimeoutError as e:
        raise ResolutionTimeout(f"Input field (first textarea) not visible within {timeout_ms}ms") from e
    return field


def resolve_submit_button(page):
    return page.get_by_role("button", name=TRANSLATE_BUTTON_NAME)


async def describe_controls(page) -> dict:
    """Collect a small inventory of the controls the harness depends on."""
    inventory: dict = {"url": ""}
    try:
        inventory["url"] = page.url
    except PlaywrightError:
        pass
    probes = {
        "selects": page.locator("select"),
        "comboboxes": page.get_by_role("combobox"),
        "textareas": page.locator("textarea"),
        "translate_buttons": resolve_submit_button(page),
    }
    for key, loc in probes.items():
        try:
            inventory[key] = await loc.count()
        except PlaywrightError:
            inventory[key] = None
    return inventory
