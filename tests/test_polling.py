import pytest

from polling import AssertionTimeout, PollState, expect_keyword_absent, expect_keyword_present


def sequence_reader(*snapshots):
    """Return successive snapshots, repeating the last one forever."""
    calls = {"n": 0}

    async def read():
        i = min(calls["n"], len(snapshots) - 1)
        calls["n"] += 1
        return snapshots[i]

    read.calls = calls
    return read


@pytest.mark.asyncio
async def test_present_succeeds_on_first_matching_sample():
    read = sequence_reader("", "", "මම", "මම හෙට එනවා")
    result = await expect_keyword_present(read, "මම හෙට", timeout_ms=1_000, interval_ms=1)
    assert result.state is PollState.SUCCEEDED
    assert result.samples == 4
    assert result.last_observed == "මම හෙට එනවා"
    assert read.calls["n"] == 4


@pytest.mark.asyncio
async def test_present_times_out_naming_keyword_and_last_output():
    read = sequence_reader("", "මම")
    with pytest.raises(AssertionTimeout) as exc:
        await expect_keyword_present(read, "මම හෙට", timeout_ms=50, interval_ms=5)
    message = str(exc.value)
    assert "Expected output to contain: මම හෙට" in message
    assert "'මම'" in message


@pytest.mark.asyncio
async def test_absent_holds_for_whole_window():
    read = sequence_reader("", "මඅමඅ ගෙධඅරඅ")
    result = await expect_keyword_absent(read, "මම ගෙදර", timeout_ms=60, interval_ms=5)
    assert result.state is PollState.SUCCEEDED
    assert result.samples > 1
    assert result.elapsed_ms >= 50


@pytest.mark.asyncio
async def test_absent_fails_on_late_appearance():
    read = sequence_reader("", "", "මම ගෙදර යනවා")
    with pytest.raises(AssertionTimeout, match="NOT contain: මම ගෙදර"):
        await expect_keyword_absent(read, "මම ගෙදර", timeout_ms=1_000, interval_ms=1)
    assert read.calls["n"] == 3


@pytest.mark.asyncio
async def test_reader_is_sampled_at_least_once():
    read = sequence_reader("ඔයාට")
    result = await expect_keyword_present(read, "ඔයාට", timeout_ms=0, interval_ms=10)
    assert result.ok
    assert result.samples == 1


@pytest.mark.asyncio
async def test_empty_keyword_is_rejected():
    read = sequence_reader("anything")
    with pytest.raises(ValueError):
        await expect_keyword_present(read, "")
    with pytest.raises(ValueError):
        await expect_keyword_absent(read, "")
