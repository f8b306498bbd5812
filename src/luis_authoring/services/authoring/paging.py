"""Paged collection scanning and the find-or-create resolver shared by every resource kind."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

_log = logging.getLogger("luis_authoring.paging")

PAGE_SIZE = 100

T = TypeVar("T")

PageFetcher = Callable[[int, int], Awaitable[Sequence[T]]]


async def get_all_pages(fetch: PageFetcher[T], *, take: int = PAGE_SIZE) -> List[T]:
    """
    Collect a remote collection by calling ``fetch(skip, take)`` until a page
    shorter than ``take`` comes back.

    A collection whose size is an exact multiple of ``take`` costs one extra,
    empty request. The service is trusted to honour ``take``; a fetcher that
    always returns full pages never terminates.
    """
    skip = 0
    results: List[T] = []
    while True:
        page = await fetch(skip, take)
        results.extend(page)
        skip = len(results)
        if len(page) < take:
            break
    _log.debug("scanned %d items", len(results))
    return results


async def find_in_all_pages(fetch: PageFetcher[T], predicate: Callable[[T], bool]) -> Optional[str]:
    """Return the ``id`` of the first scanned item matching ``predicate``, if any."""
    items = await get_all_pages(fetch)
    for item in items:
        if predicate(item):
            return getattr(item, "id")
    return None


@dataclass(slots=True, frozen=True)
class Resolution:
    id: str
    created: bool


async def find_or_create(
    fetch: PageFetcher[T],
    predicate: Callable[[T], bool],
    create: Callable[[], Awaitable[str]],
) -> Resolution:
    existing = await find_in_all_pages(fetch, predicate)
    if existing is not None:
        return Resolution(id=existing, created=False)
    return Resolution(id=await create(), created=True)


def named(name: str) -> Callable[[object], bool]:
    """Exact, case-sensitive name match."""
    return lambda item: getattr(item, "name", None) == name


__all__ = ["PAGE_SIZE", "PageFetcher", "Resolution", "find_in_all_pages", "find_or_create", "get_all_pages", "named"]
