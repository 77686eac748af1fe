#!/usr/bin/env python3
# ==============================================================================
# [FILE] src/run_pipeline.py
# [PROJECT] ChannelLedger
# [ROLE] Main entrypoint - orchestrate full pipeline
# [VERSION] v1.1
# [UPDATED] 2026-10-18
# ==============================================================================

"""
Usage: python -m src.run_pipeline [config.yml]

refresh raw playlist if stale -> reconcile groups -> filter playlist ->
build EPG -> outputs/report.json
"""

import logging

from functions.config import PipelineConfig, load_config
from functions.groups import active_groups
from functions.runner import __app__, __version__, config_arg, run_main, setup_logging, utc_timestamp, write_json
from src.build_epg import build_epg
from src.filter_playlist import filter_playlist
from src.reconcile_groups import reconcile_groups
from src.refresh_sources import refresh_playlist

__component__ = "run_pipeline"


def run(cfg: PipelineConfig) -> dict:
    """Run every step once. Mandatory-path errors propagate; EPG problems do not."""
    logging.info("Pipeline started")
    if cfg.epg_enabled:
        # the EPG download needs credentials even when the cached playlist is fresh
        cfg.require_provider()

    refreshed = refresh_playlist(cfg)
    groups = reconcile_groups(cfg)
    stats = filter_playlist(cfg, active_groups(groups.groups))
    epg_result = build_epg(cfg)

    report = {
        "timestamp_utc": utc_timestamp(),
        "app": __app__,
        "component": __component__,
        "version": __version__,
        "playlist_refreshed": refreshed,
        "groups": groups.counts(),
        "counts": {
            "parsed_total": stats.parsed,
            "kept": stats.kept,
            "inactive_group": stats.inactive_group,
            "excluded": stats.excluded,
            "orphaned": stats.orphaned,
        },
        "epg": epg_result.as_dict(),
        "warnings": [],
    }
    if stats.kept == 0:
        report["warnings"].append("filtered_playlist_empty")
    if groups.changes.demoted:
        report["warnings"].append("groups_demoted: " + ", ".join(groups.changes.demoted))
    if not epg_result.written:
        report["warnings"].append(f"epg_{epg_result.status}: {epg_result.reason}")

    write_json(cfg.paths.report, report)
    logging.info("Pipeline complete: %d channels, EPG %s", stats.kept, epg_result.status)
    return report


def main() -> int:
    cfg = load_config(config_arg())
    setup_logging(__component__, cfg.debug)
    report = run(cfg)
    print(f"Written {report['counts']['kept']} channels → {cfg.paths.filtered_playlist}")
    print(f"EPG: {report['epg']['status']}")
    print(f"Wrote report → {cfg.paths.report}")
    return 0


if __name__ == "__main__":
    raise SystemExit(run_main(__component__, main))
