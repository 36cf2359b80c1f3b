"""README catalog extraction.

Turns the ``## Libraries`` section of the catalog README into an ordered
list of :class:`LibraryRecord`. The scan is a left fold over the lines:
each line maps the previous :class:`ScanState` to the next one, so the
whole pass is a pure function of the input text.

Recognised lines inside the section::

    ### Category
    #### Sub-category
    * [Name](https://github.com/owner/repo) - Description
    ![badge][badge-android]
    <blank line>            (finalizes the pending entry)

Anything else is ignored. An entry that is still pending when the input
ends is dropped, matching how the published README is laid out.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from functools import reduce

from kmp_catalog.config import settings
from kmp_catalog.models import LibraryRecord

_TOP_LEVEL_PREFIX = "## "
_CATEGORY_PREFIX = "### "
_SUB_CATEGORY_PREFIX = "#### "

_LIBRARY_ITEM = re.compile(r"^\* \[([^\]]+)\]\(([^)]+)\) - (.+)$")
_PLATFORM_BADGE = re.compile(r"^!\[badge\]\[badge-(.+)\]$")


# ---------------------------------------------------------------------------
# Pending entry: Idle | Accumulating
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Idle:
    """No entry is being collected."""


@dataclass(frozen=True, slots=True)
class Accumulating:
    """An entry line was seen; badges are attached until a blank line."""

    record: LibraryRecord


Pending = Idle | Accumulating

_IDLE = Idle()


@dataclass(frozen=True, slots=True)
class ScanState:
    in_section: bool = False
    category: str = ""
    sub_category: str = ""
    pending: Pending = _IDLE
    records: tuple[LibraryRecord, ...] = ()


# ---------------------------------------------------------------------------
# Line handlers
# ---------------------------------------------------------------------------


def _parse_item(index: int, line: str, state: ScanState) -> LibraryRecord | None:
    match = _LIBRARY_ITEM.match(line)
    if match is None or len(match.groups()) != 3:
        return None
    name, url, description = match.groups()
    # Entries before the first category heading have no group to live in.
    if not state.category:
        return None
    return LibraryRecord(
        id=str(index),
        name=name,
        url=url,
        description=description,
        category=state.category,
        sub_category=state.sub_category,
    )


def _parse_badge(line: str) -> str | None:
    match = _PLATFORM_BADGE.match(line)
    if match is None or len(match.groups()) != 1:
        return None
    return match.group(1)


def _step(section: str, state: ScanState, numbered: tuple[int, str]) -> ScanState:
    """Advance the scan by one line."""
    index, line = numbered

    if line.rstrip() == section:
        return replace(state, in_section=True)

    if not state.in_section:
        return state

    if line.startswith(_TOP_LEVEL_PREFIX):
        return replace(state, in_section=False)

    match state.pending:
        case Accumulating(record) if line.strip() == "":
            return replace(state, pending=_IDLE, records=(*state.records, record))

    if line.startswith(_CATEGORY_PREFIX):
        return replace(
            state,
            category=line[len(_CATEGORY_PREFIX) :].strip(),
            sub_category="",
        )

    if line.startswith(_SUB_CATEGORY_PREFIX):
        return replace(state, sub_category=line[len(_SUB_CATEGORY_PREFIX) :].strip())

    if line.startswith("* ["):
        record = _parse_item(index, line, state)
        if record is None:
            return state
        return replace(state, pending=Accumulating(record))

    if line.startswith("![badge][badge-"):
        platform = _parse_badge(line)
        match state.pending:
            case Accumulating(record) if platform:
                return replace(state, pending=Accumulating(record.with_platform(platform)))
        return state

    return state


def _lines(text: str) -> list[str]:
    # Split on "\n" only so ids stay line indexes and a trailing newline
    # still yields the blank line that closes the last entry.
    return [line.removesuffix("\r") for line in text.split("\n")]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_libraries(text: str, section: str | None = None) -> list[LibraryRecord]:
    """Extract catalog entries from README *text*.

    Args:
        text: Full Markdown document.
        section: Heading line that opens the catalog section. Defaults to
            ``settings.libraries_section``.

    Returns:
        Records in document order, without star counts. Empty when the
        section is missing.
    """
    marker = (section or settings.libraries_section).rstrip()
    final = reduce(
        lambda state, numbered: _step(marker, state, numbered),
        enumerate(_lines(text)),
        ScanState(),
    )
    return list(final.records)
