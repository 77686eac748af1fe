"""
ChannelLedger — Filter Playlist

Purpose
- Stream the raw provider playlist and keep only entries whose group-title is
  active in the curated groups list and whose #EXTINF line contains none of
  the configured exclude substrings (case-insensitive, whole line).
- Write the result to paths.filtered_playlist, always starting with #EXTM3U.

Inputs
- config/channelledger.yml
- paths.raw_playlist, paths.groups_list

Outputs
- paths.filtered_playlist
"""

from __future__ import annotations

import logging
from typing import AbstractSet

from functions.config import PipelineConfig, load_config
from functions.groups import active_groups, read_groups_file
from functions.m3u import FilterStats, filter_entries, iter_lines, write_lines
from functions.runner import config_arg, run_main, setup_logging

__component__ = "filter_playlist"


def filter_playlist(cfg: PipelineConfig, active: AbstractSet[str]) -> FilterStats:
    stats = FilterStats()
    if not active:
        logging.warning("No active groups; %s will only hold the header", cfg.paths.filtered_playlist)

    lines = filter_entries(iter_lines(cfg.paths.raw_playlist), active, cfg.exclude, stats)
    write_lines(cfg.paths.filtered_playlist, lines)

    logging.info(
        "Filtered: parsed=%d kept=%d inactive_group=%d excluded=%d orphaned=%d",
        stats.parsed, stats.kept, stats.inactive_group, stats.excluded, stats.orphaned,
    )
    return stats


def main() -> int:
    cfg = load_config(config_arg())
    setup_logging(__component__, cfg.debug)
    active = active_groups(read_groups_file(cfg.paths.groups_list))
    stats = filter_playlist(cfg, active)
    print(f"Written {stats.kept} channels → {cfg.paths.filtered_playlist}")
    return 0


if __name__ == "__main__":
    raise SystemExit(run_main(__component__, main))
