#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/m3u.py
# [PROJECT] ChannelLedger
# [ROLE] M3U line reading, group scan and the group/exclude filter
# [VERSION] v1.1
# [UPDATED] 2026-10-18
# ==============================================================================

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import AbstractSet, Iterable, Iterator, Optional, Set

from functions.errors import SourceUnavailable
from functions.paths import atomic_write

HEADER = "#EXTM3U"
METADATA_PREFIX = "#EXTINF"

GROUP_TITLE_RX = re.compile(r'group-title="([^"]*)"')
TVG_ID_RX = re.compile(r'tvg-id="([^"]*)"')

AWAITING_METADATA = "awaiting_metadata"
PENDING_CONTENT = "pending_content"


def iter_lines(path: Path) -> Iterator[str]:
    """Lazily yield stripped lines. A missing or unreadable file aborts the pass."""
    try:
        f = path.open("r", encoding="utf-8", errors="ignore")
    except OSError as e:
        raise SourceUnavailable(f"cannot read playlist: {path} :: {e}") from e
    with f:
        for line in f:
            yield line.strip()


def is_metadata(line: str) -> bool:
    return line.startswith(METADATA_PREFIX)


def _attr(rx: re.Pattern, line: str) -> Optional[str]:
    m = rx.search(line)
    if not m:
        return None
    return m.group(1).strip() or None


def group_title(line: str) -> Optional[str]:
    return _attr(GROUP_TITLE_RX, line)


def tvg_id(line: str) -> Optional[str]:
    return _attr(TVG_ID_RX, line)


def scan_groups(lines: Iterable[str]) -> Set[str]:
    """Distinct group-title values over every metadata line."""
    groups: Set[str] = set()
    for line in lines:
        if is_metadata(line):
            g = group_title(line)
            if g:
                groups.add(g)
    return groups


def collect_tvg_ids(lines: Iterable[str]) -> Set[str]:
    ids: Set[str] = set()
    for line in lines:
        if is_metadata(line):
            cid = tvg_id(line)
            if cid:
                ids.add(cid)
    return ids


def is_excluded(line: str, exclude: AbstractSet[str]) -> bool:
    lower = line.lower()
    return any(token in lower for token in exclude)


@dataclass
class FilterStats:
    parsed: int = 0
    kept: int = 0
    inactive_group: int = 0
    excluded: int = 0
    orphaned: int = 0


def filter_entries(
    lines: Iterable[str],
    active_groups: AbstractSet[str],
    exclude: AbstractSet[str],
    stats: Optional[FilterStats] = None,
) -> Iterator[str]:
    """
    Yield the header, then every metadata/content pair whose group is active
    and whose metadata line contains none of the exclude substrings.

    Two states: AWAITING_METADATA and PENDING_CONTENT. The include/skip
    decision is made on the metadata line and applied to the line after it.
    A metadata line with no content line before the next metadata line is
    dropped as an orphan.
    """
    stats = stats if stats is not None else FilterStats()
    yield HEADER

    state = AWAITING_METADATA
    pending: Optional[str] = None
    include = False

    for line in lines:
        if not line:
            continue

        if state == PENDING_CONTENT:
            if is_metadata(line):
                stats.orphaned += 1
                logging.debug("Dropped metadata line without content: %s", pending)
            else:
                if include:
                    stats.kept += 1
                    yield pending
                    yield line
                state = AWAITING_METADATA
                pending = None
                continue

        if not is_metadata(line):
            continue

        stats.parsed += 1
        group = group_title(line)
        if group is None or group not in active_groups:
            stats.inactive_group += 1
            include = False
        elif is_excluded(line, exclude):
            stats.excluded += 1
            include = False
        else:
            include = True
        pending = line
        state = PENDING_CONTENT

    if state == PENDING_CONTENT:
        stats.orphaned += 1
        logging.debug("Dropped trailing metadata line without content: %s", pending)


def write_lines(path: Path, lines: Iterable[str]) -> int:
    """Atomically write lines to `path`. Returns the number of lines written."""
    n = 0
    with atomic_write(path, "w", encoding="utf-8", newline="\n") as f:
        for line in lines:
            f.write(line)
            f.write("\n")
            n += 1
    return n
