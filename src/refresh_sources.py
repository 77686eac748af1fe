#!/usr/bin/env python3
# ==============================================================================
# [FILE] src/refresh_sources.py
# [PROJECT] ChannelLedger
# [ROLE] Download provider playlist (age-based refresh) and EPG feed
# [VERSION] v1.0
# [UPDATED] 2026-10-18
# ==============================================================================

import logging

from functions.config import PipelineConfig, load_config
from functions.http import build_url, fetch_to_file, file_age, is_stale
from functions.runner import config_arg, run_main, setup_logging


def playlist_url(cfg: PipelineConfig) -> str:
    p = cfg.require_provider()
    return build_url(
        p.base_url,
        p.playlist_endpoint,
        {"username": p.username, "password": p.password, "type": "m3u_plus", "output": "ts"},
    )


def epg_url(cfg: PipelineConfig) -> str:
    p = cfg.require_provider()
    return build_url(p.base_url, p.epg_endpoint, {"username": p.username, "password": p.password})


def refresh_playlist(cfg: PipelineConfig, force: bool = False) -> bool:
    """
    Re-download the raw playlist when it is missing or older than the
    configured threshold. Returns True when a download happened.
    FetchFailed propagates: without a playlist there is nothing to filter.
    """
    raw = cfg.paths.raw_playlist
    if not force and not is_stale(raw, cfg.refresh_age_sec):
        logging.info("Raw playlist fresh (age=%.0fs), reusing %s", file_age(raw), raw)
        return False

    logging.info("Refreshing raw playlist -> %s", raw)
    fetch_to_file(playlist_url(cfg), raw, user_agent=cfg.user_agent, timeout_sec=cfg.timeout_sec)
    return True


def download_epg(cfg: PipelineConfig) -> int:
    """Fetch the guide feed into the raw EPG cache. FetchFailed is left to the caller."""
    return fetch_to_file(epg_url(cfg), cfg.paths.raw_epg, user_agent=cfg.user_agent, timeout_sec=cfg.timeout_sec)


def main() -> int:
    cfg = load_config(config_arg())
    setup_logging("refresh_sources", cfg.debug)
    refreshed = refresh_playlist(cfg, force=True)
    print(f"Refreshed={refreshed} → {cfg.paths.raw_playlist}")
    return 0


if __name__ == "__main__":
    raise SystemExit(run_main("refresh_sources", main))
