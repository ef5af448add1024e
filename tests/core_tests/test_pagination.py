"""Tests for the token paginator."""

from typing import Any

import pytest

from ecsctl.core.pagination import Page, PageError, iter_pages, stream_paginated


class ScriptedFetcher:
    """Replays scripted (page, token) responses and records every call."""

    def __init__(self, script: list[Any]) -> None:
        self.script = list(script)
        self.calls: list[tuple[Any, str | None]] = []

    def fetch(self, state: Any, token: str | None) -> tuple[Any, Any, str | None]:
        self.calls.append((state, token))
        step = self.script.pop(0)
        if isinstance(step, Exception):
            raise step
        page, next_token = step
        return page, state, next_token


@pytest.mark.parametrize(
    ("script", "expected_calls"),
    [
        ([("a", None)], 1),
        ([("a", "")], 1),
        ([("a", "t1"), ("b", None)], 2),
        ([("a", "t1"), ("b", "t2"), ("c", "")], 3),
    ],
)
def test_one_call_per_non_empty_token(script: list[Any], expected_calls: int) -> None:
    fetcher = ScriptedFetcher(script)

    pages = list(iter_pages(fetcher, "seed"))

    assert len(fetcher.calls) == expected_calls
    assert pages == [page for page, _ in script]


def test_first_call_has_no_token_and_tokens_are_passed_through() -> None:
    fetcher = ScriptedFetcher([("a", "t1"), ("b", "t2"), ("c", None)])

    list(iter_pages(fetcher, "seed"))

    assert fetcher.calls == [("seed", None), ("seed", "t1"), ("seed", "t2")]


def test_state_is_threaded_between_calls() -> None:
    seen: list[tuple[int, str | None]] = []

    def fetch(state: int, token: str | None) -> tuple[str, int, str | None]:
        seen.append((state, token))
        return f"page-{state}", state + 1, "more" if state < 2 else None

    assert list(iter_pages(fetch, 0)) == ["page-0", "page-1", "page-2"]
    assert seen == [(0, None), (1, "more"), (2, "more")]


def test_error_is_yielded_once_and_ends_the_stream() -> None:
    boom = RuntimeError("boom")
    fetcher = ScriptedFetcher([("a", "t1"), boom, ("never", None)])

    results = list(stream_paginated(fetcher, None))

    assert results == [Page("a"), PageError(boom)]
    assert len(fetcher.calls) == 2


def test_error_on_first_call() -> None:
    boom = RuntimeError("boom")
    fetcher = ScriptedFetcher([boom])

    results = list(stream_paginated(fetcher, None))

    assert results == [PageError(boom)]
    assert len(fetcher.calls) == 1


def test_iter_pages_raises_the_fetch_error() -> None:
    fetcher = ScriptedFetcher([("a", "t1"), ValueError("bad page")])
    pages = iter_pages(fetcher, None)

    assert next(pages) == "a"
    with pytest.raises(ValueError, match="bad page"):
        next(pages)
    assert len(fetcher.calls) == 2


def test_pages_are_fetched_lazily() -> None:
    fetcher = ScriptedFetcher([("a", "t1"), ("b", None)])
    stream = stream_paginated(fetcher, None)

    assert fetcher.calls == []
    assert next(stream) == Page("a")
    assert len(fetcher.calls) == 1
    assert next(stream) == Page("b")
    assert len(fetcher.calls) == 2
    with pytest.raises(StopIteration):
        next(stream)
