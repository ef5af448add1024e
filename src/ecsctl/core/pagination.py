"""Lazy iteration over token-paginated remote list operations.

A fetcher performs exactly one remote round trip per call:

    fetch(state, token) -> (page, next_state, next_token)

``stream_paginated`` calls it first with ``(initial_state, None)`` and keeps
calling it with the returned state and token until the token is absent or
empty. Pages are fetched only when the consumer asks for the next item.
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Generic, Protocol, TypeAlias, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")
P = TypeVar("P")

PageToken: TypeAlias = str


class PageFetcher(Protocol[S, P]):
    """A single-round-trip page fetch for a paginated list operation."""

    def fetch(self, state: S, token: PageToken | None) -> tuple[P, S, PageToken | None]:
        """Fetch one page.

        Args:
            state: Caller state threaded between pages.
            token: Continuation token, ``None`` for the first page.

        Returns:
            The page, the state for the next call, and the next token.
        """
        ...


FetchFn: TypeAlias = Callable[[S, PageToken | None], tuple[P, S, PageToken | None]]


@dataclass(frozen=True)
class Start(Generic[S]):
    """No page fetched yet."""

    seed: S


@dataclass(frozen=True)
class HasMore(Generic[S]):
    """At least one page fetched and the remote reported a continuation token."""

    state: S
    token: PageToken


@dataclass(frozen=True)
class Done:
    """No further remote calls will be made."""


PaginationState: TypeAlias = Start[S] | HasMore[S] | Done


@dataclass(frozen=True)
class Page(Generic[P]):
    """A successfully fetched page."""

    value: P


@dataclass(frozen=True)
class PageError:
    """The fetch failed; always the last item of a stream."""

    error: Exception


PageResult: TypeAlias = Page[P] | PageError


def stream_paginated(
    fetcher: "PageFetcher[S, P] | FetchFn[S, P]",
    initial_state: S,
) -> Iterator[PageResult[P]]:
    """Turn a paginated fetcher into a lazy stream of page results.

    Args:
        fetcher: A ``PageFetcher`` or a plain callable with the same signature.
        initial_state: State passed to the first fetch.

    Yields:
        ``Page`` items in remote order, followed by at most one ``PageError``.
    """
    fetch = fetcher.fetch if hasattr(fetcher, "fetch") else fetcher
    state: PaginationState[S] = Start(initial_state)
    pages = 0

    while True:
        match state:
            case Start(seed=seed):
                current, token = seed, None
            case HasMore(state=current, token=token) if token:
                pass
            case _:
                logger.debug("Pagination finished after %d page(s)", pages)
                return

        try:
            page, next_state, next_token = fetch(current, token)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Page fetch failed after %d page(s): %s", pages, exc)
            yield PageError(exc)
            return

        pages += 1
        state = HasMore(next_state, next_token) if next_token else Done()
        yield Page(page)


def iter_pages(
    fetcher: "PageFetcher[S, P] | FetchFn[S, P]",
    initial_state: S,
) -> Iterator[P]:
    """Yield page values, raising the first fetch error.

    Args:
        fetcher: A ``PageFetcher`` or a plain callable with the same signature.
        initial_state: State passed to the first fetch.

    Yields:
        Page values in remote order.
    """
    for result in stream_paginated(fetcher, initial_state):
        if isinstance(result, PageError):
            raise result.error
        yield result.value
