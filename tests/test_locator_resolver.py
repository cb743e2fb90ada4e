import pytest
from playwright.async_api import Error as PlaywrightError

from fakes import FakeElement, FakePage, sinhala_select
from locator_resolver import (
    ControlOutcome,
    ResolutionTimeout,
    SwitcherShape,
    describe_controls,
    exact_label,
    resolve_input_field,
    switch_language,
)


def test_exact_label_is_anchored_and_case_sensitive():
    pattern = exact_label("Sinhala")
    assert pattern.match("Sinhala")
    assert not pattern.match("sinhala")
    assert not pattern.match("Sinhala (LK)")


@pytest.mark.asyncio
async def test_native_select_by_label():
    select = sinhala_select()
    page = FakePage(selects=[select], comboboxes=[FakeElement()])
    result = await switch_language(page, "Sinhala")
    assert result.shape is SwitcherShape.NATIVE_SELECT
    assert result.outcome is ControlOutcome.USED
    assert select.selected == ["Sinhala"]


@pytest.mark.asyncio
async def test_native_select_falls_back_to_lowercase_value():
    select = sinhala_select(reject_label=True)
    page = FakePage(selects=[select])
    result = await switch_language(page, "Sinhala")
    assert result.outcome is ControlOutcome.USED
    assert select.selected == ["sinhala"]


@pytest.mark.asyncio
async def test_native_select_rejecting_both_modes_is_a_resolution_failure():
    page = FakePage(selects=[sinhala_select(reject_label=True, reject_value=True)])
    with pytest.raises(ResolutionTimeout):
        await switch_language(page, "Sinhala")


@pytest.mark.asyncio
async def test_hidden_native_select_is_a_resolution_failure():
    page = FakePage(selects=[sinhala_select(visible=False)])
    with pytest.raises(ResolutionTimeout):
        await switch_language(page, "Sinhala", timeout_ms=10)


@pytest.mark.asyncio
async def test_combobox_used_when_no_native_select():
    trigger = FakeElement()
    option = FakeElement(text="Sinhala")
    page = FakePage(comboboxes=[trigger], options=[option])
    result = await switch_language(page, "Sinhala")
    assert result.shape is SwitcherShape.COMBOBOX
    assert result.outcome is ControlOutcome.USED
    assert trigger.clicks == 1
    assert option.clicks == 1


@pytest.mark.asyncio
async def test_combobox_without_matching_option_fails():
    page = FakePage(comboboxes=[FakeElement()], options=[])
    with pytest.raises(ResolutionTimeout):
        await switch_language(page, "Sinhala", timeout_ms=10)


@pytest.mark.asyncio
async def test_no_switcher_is_tolerated():
    result = await switch_language(FakePage(), "Sinhala")
    assert result.shape is None
    assert result.outcome is ControlOutcome.ABSENT


@pytest.mark.asyncio
async def test_input_field_is_first_textarea():
    first, second = FakeElement(), FakeElement()
    page = FakePage(textareas=[first, second])
    field = await resolve_input_field(page)
    await field.fill("mama")
    assert first.value == "mama"
    assert second.value == ""


@pytest.mark.asyncio
async def test_missing_input_field_times_out():
    with pytest.raises(ResolutionTimeout, match="not visible within 10ms"):
        await resolve_input_field(FakePage(), timeout_ms=10)


@pytest.mark.asyncio
async def test_describe_controls_counts():
    page = FakePage(selects=[FakeElement()], textareas=[FakeElement(), FakeElement()])
    page.url = "https://translator.test/"
    inventory = await describe_controls(page)
    assert inventory == {
        "url": "https://translator.test/",
        "selects": 1,
        "comboboxes": 0,
        "textareas": 2,
        "translate_buttons": 0,
    }


@pytest.mark.asyncio
async def test_describe_controls_tolerates_errors():
    class BrokenLocator:
        async def count(self):
            raise PlaywrightError("Target closed")

    page = FakePage()
    page.locator = lambda selector, has_text=None: BrokenLocator()
    inventory = await describe_controls(page)
    assert inventory["selects"] is None
    assert inventory["textareas"] is None
    assert inventory["comboboxes"] == 0


@pytest.mark.asyncio
async def test_select_without_sinhala_option_falls_through_to_combobox():
    languages = FakeElement(options=("English", "sinhala", "Sinhala (LK)"))
    option = FakeElement(text="Sinhala")
    page = FakePage(selects=[languages], comboboxes=[FakeElement()], options=[FakeElement(text="Tamil"), option])
    result = await switch_language(page, "Sinhala")
    assert result.shape is SwitcherShape.COMBOBOX
    assert languages.selected == []
    assert option.clicks == 1


@pytest.mark.asyncio
async def test_combobox_option_name_must_match_exactly():
    page = FakePage(comboboxes=[FakeElement()], options=[FakeElement(text="Sinhala (Sri Lanka)")])
    with pytest.raises(ResolutionTimeout):
        await switch_language(page, "Sinhala", timeout_ms=10)


@pytest.mark.asyncio
async def test_unrelated_buttons_are_not_counted():
    page = FakePage(buttons=[FakeElement(text="Copy"), FakeElement(text="Translate now")])
    inventory = await describe_controls(page)
    assert inventory["translate_buttons"] == 1
