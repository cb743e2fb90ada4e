from playwright.async_api import Error as PlaywrightError

from keyword_extractor import SINHALA_CHAR


async def _read_mirror_field(page) -> str:
    textareas = page.locator("textarea")
    try:
        if await textareas.count() < 2:
            return ""
        value = await textareas.nth(1).input_value()
    except PlaywrightError:
        return ""
    return (value or "").strip()


async def _read_rendered_node(page, timeout_ms: int) -> str:
    node = page.locator("*:visible", has_text=SINHALA_CHAR).first
    try:
        await node.wait_for(state="visible", timeout=timeout_ms)
        return ((await node.text_content()) or "").strip()
    except PlaywrightError:
        return ""


async def get_output_text(page, timeout_ms: int = 15_000) -> str:
    """Snapshot the rendered output, or "" when none is visible yet.

    Some builds mirror the output into a second textarea, others render it
    into arbitrary nodes, so the mirror field is tried before scanning the
    visible DOM for Sinhala text.
    """
    mirrored = await _read_mirror_field(page)
    if mirrored:
        return mirrored
    return await _read_rendered_node(page, timeout_ms)
