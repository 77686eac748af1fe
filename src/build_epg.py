#!/usr/bin/env python3
# ==============================================================================
# [FILE]     src/build_epg.py
# [PROJECT]  ChannelLedger
# [ROLE]     Prune provider EPG down to channels kept in the filtered playlist
# [VERSION]  v1.0
# [UPDATED]  2026-10-18
# ==============================================================================

"""
ChannelLedger — Build EPG

Purpose
- Collect tvg-id values from the filtered playlist.
- Download the provider XMLTV feed into paths.raw_epg.
- Drop every <channel> and <programme> not tied to a kept tvg-id and write
  the result to paths.epg_output (.gz suffix -> gzip).

Skip Behavior
- The EPG path is optional. Disabled by config, no tvg-id in the filtered
  playlist, download failure, empty or blank payload, malformed XML (or a
  corrupt gzip body) and an unwritable output all produce an EpgResult with a
  distinct status; none of them fails the run.
"""

from __future__ import annotations

import logging

from functions import epg
from functions.config import PipelineConfig, load_config
from functions.errors import EpgEmpty, EpgParseFailed, FetchFailed
from functions.m3u import collect_tvg_ids, iter_lines
from functions.runner import config_arg, run_main, setup_logging
from src.refresh_sources import download_epg

__component__ = "build_epg"


def _skip(status: str, reason: str) -> epg.EpgResult:
    logging.warning("EPG skipped (%s): %s", status, reason)
    return epg.EpgResult(status=status, reason=reason)


def build_epg(cfg: PipelineConfig) -> epg.EpgResult:
    if not cfg.epg_enabled:
        return _skip(epg.DISABLED, "pipeline.epg_enabled is false")

    retained = collect_tvg_ids(iter_lines(cfg.paths.filtered_playlist))
    if not retained:
        return _skip(epg.NO_IDS, f"no tvg-id values in {cfg.paths.filtered_playlist.name}")
    logging.info("Retained tvg-id values: %d", len(retained))

    try:
        download_epg(cfg)
    except FetchFailed as e:
        return _skip(epg.FETCH_FAILED, str(e))

    try:
        root = epg.load_epg(cfg.paths.raw_epg)
    except EpgEmpty as e:
        return _skip(epg.EMPTY, str(e))
    except EpgParseFailed as e:
        return _skip(epg.PARSE_FAILED, str(e))

    channels_removed, programmes_removed = epg.prune_epg(root, retained)
    try:
        epg.write_epg(root, cfg.paths.epg_output)
    except OSError as e:
        return _skip(epg.WRITE_FAILED, f"{cfg.paths.epg_output} :: {e}")

    result = epg.EpgResult(
        status=epg.WRITTEN,
        reason="ok",
        channels=len(root.findall("channel")),
        programmes=len(root.findall("programme")),
        channels_removed=channels_removed,
        programmes_removed=programmes_removed,
    )
    logging.info(
        "EPG written: channels=%d programmes=%d (removed %d/%d) -> %s",
        result.channels, result.programmes, channels_removed, programmes_removed, cfg.paths.epg_output,
    )
    return result


def main() -> int:
    cfg = load_config(config_arg())
    setup_logging(__component__, cfg.debug)
    if cfg.epg_enabled:
        cfg.require_provider()
    result = build_epg(cfg)
    print(f"EPG {result.status}: {result.reason}")
    return 0


if __name__ == "__main__":
    raise SystemExit(run_main(__component__, main))
