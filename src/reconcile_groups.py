#!/usr/bin/env python3
# ==============================================================================
# [FILE] src/reconcile_groups.py
# [PROJECT] ChannelLedger
# [ROLE] Merge curated groups list with groups offered by the raw playlist
# [VERSION] v1.0
# [UPDATED] 2026-10-18
# ==============================================================================

"""
ChannelLedger — Reconcile Groups

Purpose
- Scan the raw playlist for group-title values and merge them into the
  curated groups list (config/groups.txt by default).
- New groups start commented out; groups the provider no longer offers are
  commented out; nothing is ever removed from the list.

When pipeline.extract_groups is false the curated list is only read, never
rewritten, and must already exist.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict

from functions.config import PipelineConfig, load_config
from functions.groups import (
    GroupChanges,
    GroupState,
    active_groups,
    read_groups_file,
    reconcile,
    write_groups_file,
)
from functions.m3u import iter_lines, scan_groups
from functions.runner import config_arg, run_main, setup_logging


@dataclass
class GroupsOutcome:
    groups: Dict[str, GroupState]
    changes: GroupChanges = field(default_factory=GroupChanges)
    rewritten: bool = False

    def counts(self) -> dict:
        active = len(active_groups(self.groups))
        return {
            "total": len(self.groups),
            "active": active,
            "commented": len(self.groups) - active,
            "new": len(self.changes.added),
            "demoted": len(self.changes.demoted),
            "rewritten": self.rewritten,
        }


def reconcile_groups(cfg: PipelineConfig) -> GroupsOutcome:
    path = cfg.paths.groups_list

    if not cfg.extract_groups:
        groups = read_groups_file(path)
        logging.info("Group extraction disabled; using %d groups from %s", len(groups), path)
        return GroupsOutcome(groups=groups)

    observed = scan_groups(iter_lines(cfg.paths.raw_playlist))
    prior = read_groups_file(path) if path.exists() else {}
    if not prior:
        logging.info("No curated groups yet at %s; every group starts commented", path)

    changes = GroupChanges()
    merged = reconcile(prior, observed, changes)
    write_groups_file(path, merged)

    logging.info("Groups: observed=%d prior=%d merged=%d", len(observed), len(prior), len(merged))
    if changes.added:
        logging.info("New groups (commented): %s", ", ".join(changes.added))
    if changes.demoted:
        logging.warning("Active groups missing from feed, commented out: %s", ", ".join(changes.demoted))

    return GroupsOutcome(groups=merged, changes=changes, rewritten=True)


def main() -> int:
    cfg = load_config(config_arg())
    setup_logging("reconcile_groups", cfg.debug)
    outcome = reconcile_groups(cfg)
    c = outcome.counts()
    print(f"Groups: {c['active']} active / {c['total']} total → {cfg.paths.groups_list}")
    return 0


if __name__ == "__main__":
    raise SystemExit(run_main("reconcile_groups", main))
