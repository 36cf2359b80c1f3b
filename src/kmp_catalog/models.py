"""Catalog data model."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass, replace


@dataclass(frozen=True, slots=True)
class LibraryRecord:
    """One library entry of the catalog.

    Attributes:
        id: Zero-based index of the README line the entry came from.
        name: Display label (may contain inline Markdown).
        url: Link target of the entry.
        description: Free-text summary (may contain inline Markdown).
        category: Top-level group (``### `` heading). Never empty.
        sub_category: Finer group (``#### `` heading), possibly empty.
        platforms: Platform badge tags in README order, no duplicates.
        stars: GitHub star count, ``None`` when unknown.
    """

    id: str
    name: str
    url: str
    description: str
    category: str
    sub_category: str = ""
    platforms: tuple[str, ...] = ()
    stars: int | None = None

    def with_platform(self, platform: str) -> LibraryRecord:
        """Return a copy with *platform* appended unless already present."""
        if platform in self.platforms:
            return self
        return replace(self, platforms=(*self.platforms, platform))

    def to_dict(self) -> dict:
        data = asdict(self)
        data["platforms"] = list(self.platforms)
        return data


@dataclass(frozen=True, slots=True)
class Catalog:
    """Enriched records plus the lookup sets the view filters against."""

    libraries: list[LibraryRecord]
    platforms: list[str]
    categories: list[str]

    @classmethod
    def from_records(cls, records: Iterable[LibraryRecord]) -> Catalog:
        libraries = list(records)
        return cls(
            libraries=libraries,
            platforms=collect_platforms(libraries),
            categories=collect_categories(libraries),
        )


def collect_platforms(records: Iterable[LibraryRecord]) -> list[str]:
    """Sorted distinct platform tags across *records*."""
    return sorted({p for r in records for p in r.platforms})


def collect_categories(records: Iterable[LibraryRecord]) -> list[str]:
    """Sorted distinct categories across *records*."""
    return sorted({r.category for r in records})
