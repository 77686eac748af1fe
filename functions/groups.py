#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/groups.py
# [PROJECT] ChannelLedger
# [ROLE] Curated group list: parse, reconcile with feed groups, render
# [VERSION] v1.0
# [UPDATED] 2026-10-18
# ==============================================================================

"""
Groups list format (one group per line, human-editable):

    News
    //Sports

Bare lines are Active, lines starting with ``//`` are Commented, blank lines
are ignored. The file is fully rewritten on every reconciliation, sorted by
name.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, Dict, Iterable, List, Mapping, Set

from functions.errors import SourceUnavailable
from functions.paths import atomic_write

COMMENT_MARKER = "//"


class GroupState(enum.Enum):
    ACTIVE = "active"
    COMMENTED = "commented"


@dataclass
class GroupChanges:
    added: List[str] = field(default_factory=list)
    demoted: List[str] = field(default_factory=list)


def parse_groups(lines: Iterable[str]) -> Dict[str, GroupState]:
    groups: Dict[str, GroupState] = {}
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        if line.startswith(COMMENT_MARKER):
            name = line[len(COMMENT_MARKER):].strip()
            state = GroupState.COMMENTED
        else:
            name = line
            state = GroupState.ACTIVE
        if name:
            groups[name] = state
    return groups


def read_groups_file(path: Path) -> Dict[str, GroupState]:
    try:
        text = path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        raise SourceUnavailable(f"cannot read groups list: {path} :: {e}") from e
    return parse_groups(text.splitlines())


def reconcile(
    prior: Mapping[str, GroupState],
    observed: AbstractSet[str],
    changes: GroupChanges = None,
) -> Dict[str, GroupState]:
    """
    Merge the curated list with the groups offered by the feed.

    Observed groups keep their prior state, or start Commented when new.
    Groups the feed no longer offers are demoted to Commented; no name is
    ever dropped.
    """
    changes = changes if changes is not None else GroupChanges()
    merged: Dict[str, GroupState] = {}

    for name in observed:
        if name in prior:
            merged[name] = prior[name]
        else:
            merged[name] = GroupState.COMMENTED
            changes.added.append(name)

    for name, state in prior.items():
        if name in observed:
            continue
        if state is GroupState.ACTIVE:
            changes.demoted.append(name)
        merged[name] = GroupState.COMMENTED

    changes.added.sort()
    changes.demoted.sort()
    return merged


def active_groups(groups: Mapping[str, GroupState]) -> Set[str]:
    return {name for name, state in groups.items() if state is GroupState.ACTIVE}


def render_groups(groups: Mapping[str, GroupState]) -> List[str]:
    out = []
    for name in sorted(groups):
        if groups[name] is GroupState.COMMENTED:
            out.append(COMMENT_MARKER + name)
        else:
            out.append(name)
    return out


def write_groups_file(path: Path, groups: Mapping[str, GroupState]) -> None:
    with atomic_write(path, "w", encoding="utf-8", newline="\n") as f:
        for line in render_groups(groups):
            f.write(line + "\n")
    logging.info("Wrote %d groups -> %s", len(groups), path)
