import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable


Reader = Callable[[], Awaitable[str]]


class AssertionTimeout(AssertionError):
    """The polled output never satisfied its predicate within the window."""


class PollState(Enum):
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    TIMED_OUT = "timed_out"
    VIOLATED = "violated"


@dataclass
class PollResult:
    state: PollState
    samples: int
    last_observed: str
    elapsed_ms: int

    @property
    def ok(self) -> bool:
        return self.state is PollState.SUCCEEDED


def _excerpt(text: str, limit: int = 200) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


async def _poll(read: Reader, predicate: Callable[[str], bool], timeout_ms: int, interval_ms: int, hold: bool) -> PollResult:
    # hold=False: stop at the first sample satisfying the predicate.
    # hold=True: every sample in the window must satisfy it; one miss ends the poll.
    loop = asyncio.get_running_loop()
    start = loop.time()
    deadline = start + timeout_ms / 1000
    samples = 0
    last = ""
    state = PollState.POLLING
    while state is PollState.POLLING:
        last = await read()
        samples += 1
        satisfied = predicate(last)
        now = loop.time()
        if hold and not satisfied:
            state = PollState.VIOLATED
        elif not hold and satisfied:
            state = PollState.SUCCEEDED
        elif now >= deadline:
            state = PollState.SUCCEEDED if hold else PollState.TIMED_OUT
        else:
            await asyncio.sleep(min(interval_ms / 1000, deadline - now))
    elapsed_ms = int((loop.time() - start) * 1000)
    return PollResult(state, samples, last, elapsed_ms)


async def expect_keyword_present(read: Reader, keyword: str, timeout_ms: int = 25_000, interval_ms: int = 250, verbose: bool = False) -> PollResult:
    if not keyword:
        raise ValueError("keyword must be non-empty")
    result = await _poll(read, lambda out: keyword in out, timeout_ms, interval_ms, hold=False)
    if verbose:
        print(f"→ Poll for {keyword!r}: {result.state.value} after {result.samples} sample(s), {result.elapsed_ms}ms")
    if not result.ok:
        raise AssertionTimeout(
            f"Expected output to contain: {keyword} "
            f"(timed out after {timeout_ms}ms; last observed: {_excerpt(result.last_observed)!r})"
        )
    return result


async def expect_keyword_absent(read: Reader, keyword: str, timeout_ms: int = 25_000, interval_ms: int = 250, verbose: bool = False) -> PollResult:
    """Pass only if no sample in the whole window contains `keyword`."""
    if not keyword:
        raise ValueError("keyword must be non-empty")
    result = await _poll(read, lambda out: keyword not in out, timeout_ms, interval_ms, hold=True)
    if verbose:
        print(f"→ Poll for absence of {keyword!r}: {result.state.value} after {result.samples} sample(s), {result.elapsed_ms}ms")
    if not result.ok:
        raise AssertionTimeout(
            f"Expected output to NOT contain: {keyword} "
            f"(seen after {result.elapsed_ms}ms in: {_excerpt(result.last_observed)!r})"
        )
    return result
