"""Filter/sort view model for the library table.

The table shows a projection of the catalog driven by a small,
immutable :class:`ViewState`. Each user action maps one state to the
next and :func:`derive` recomputes the visible rows from scratch.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from functools import lru_cache

from pyuca import Collator

from kmp_catalog.models import LibraryRecord


class SortKey(str, Enum):
    STARS = "stars"
    NAME = "name"
    CATEGORY = "category"
    SUB_CATEGORY = "sub_category"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class ViewState:
    selected_platforms: frozenset[str]
    selected_categories: frozenset[str]
    search_term: str = ""
    sort_key: SortKey = SortKey.STARS
    sort_order: SortOrder = SortOrder.DESC

    @classmethod
    def initial(cls, platforms: Iterable[str], categories: Iterable[str]) -> ViewState:
        """Landing state: everything selected, most starred first."""
        return cls(
            selected_platforms=frozenset(platforms),
            selected_categories=frozenset(categories),
        )

    def toggle_platform(self, platform: str) -> ViewState:
        return replace(
            self, selected_platforms=self.selected_platforms ^ {platform}
        )

    def toggle_category(self, category: str) -> ViewState:
        return replace(
            self, selected_categories=self.selected_categories ^ {category}
        )

    def select_all_platforms(self, checked: bool, platforms: Iterable[str]) -> ViewState:
        return replace(
            self, selected_platforms=frozenset(platforms) if checked else frozenset()
        )

    def select_all_categories(
        self, checked: bool, categories: Iterable[str]
    ) -> ViewState:
        return replace(
            self,
            selected_categories=frozenset(categories) if checked else frozenset(),
        )

    def with_search(self, term: str) -> ViewState:
        return replace(self, search_term=term)

    def toggle_sort(self, key: SortKey | str) -> ViewState:
        """Flip the order on the active column, else sort ascending by *key*."""
        key = SortKey(key)
        if key is self.sort_key:
            flipped = SortOrder.ASC if self.sort_order is SortOrder.DESC else SortOrder.DESC
            return replace(self, sort_order=flipped)
        return replace(self, sort_key=key, sort_order=SortOrder.ASC)


@lru_cache(maxsize=1)
def _collator() -> Collator:
    return Collator()


def _collate(text: str) -> tuple[tuple[int, ...], str]:
    # Unicode collation (accents and case are secondary); raw text breaks ties.
    return (_collator().sort_key(text), text)


def _sort_value(record: LibraryRecord, key: SortKey):
    if key is SortKey.STARS:
        return record.stars or 0
    if key is SortKey.CATEGORY:
        return _collate(record.category)
    if key is SortKey.SUB_CATEGORY:
        return _collate(record.sub_category)
    return _collate(record.name)


def _matches(record: LibraryRecord, needle: str) -> bool:
    return needle in record.name.casefold() or needle in record.description.casefold()


def derive(
    records: Sequence[LibraryRecord],
    state: ViewState,
    platforms: Iterable[str],
    categories: Iterable[str],
) -> list[LibraryRecord]:
    """Return the rows visible under *state*.

    Platform and category filters only apply while the selection is a
    strict subset of the known values (everything selected means no
    filter, so entries without badges stay visible). Missing star counts
    sort as zero.
    """
    result = list(records)

    if state.selected_platforms < frozenset(platforms):
        result = [
            r for r in result if any(p in state.selected_platforms for p in r.platforms)
        ]

    if state.selected_categories < frozenset(categories):
        result = [r for r in result if r.category in state.selected_categories]

    if state.search_term:
        needle = state.search_term.casefold()
        result = [r for r in result if _matches(r, needle)]

    return sorted(
        result,
        key=lambda r: _sort_value(r, state.sort_key),
        reverse=state.sort_order is SortOrder.DESC,
    )
