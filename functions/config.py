#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/config.py
# [PROJECT] ChannelLedger
# [ROLE] YAML config loading and validation into an explicit run context
# [VERSION] v1.0
# [UPDATED] 2026-10-18
# ==============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional

import yaml

from functions.errors import ConfigInvalid
from functions.paths import BASE_DIR, DEFAULT_CONFIG, resolve

REQUIRED_PATHS = ("raw_playlist", "filtered_playlist", "groups_list", "epg_output")


@dataclass(frozen=True)
class Paths:
    raw_playlist: Path
    filtered_playlist: Path
    groups_list: Path
    epg_output: Path
    raw_epg: Path
    report: Path


@dataclass(frozen=True)
class Provider:
    base_url: str = ""
    username: str = ""
    password: str = ""
    playlist_endpoint: str = "get.php"
    epg_endpoint: str = "xmltv.php"


@dataclass(frozen=True)
class PipelineConfig:
    paths: Paths
    provider: Provider = field(default_factory=Provider)
    exclude: FrozenSet[str] = frozenset()
    refresh_age_sec: float = 12 * 3600
    extract_groups: bool = True
    epg_enabled: bool = True
    user_agent: str = "ChannelLedger/1.0"
    timeout_sec: int = 60
    debug: bool = False

    def require_provider(self) -> Provider:
        """Provider settings are only mandatory once a download is needed."""
        p = self.provider
        missing = [k for k in ("base_url", "username", "password") if not getattr(p, k)]
        if missing:
            raise ConfigInvalid("provider." + ", provider.".join(missing) + " required for download")
        return p


def load_yaml(path: Path) -> dict:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigInvalid(f"config file not found: {path}") from e
    except (OSError, yaml.YAMLError) as e:
        raise ConfigInvalid(f"config file unreadable: {path} :: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigInvalid(f"config root must be a mapping: {path}")
    return raw


def normalize_exclude(values) -> FrozenSet[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    return frozenset(str(v).strip().lower() for v in values if str(v or "").strip())


def _paths(section: dict, base_dir: Path) -> Paths:
    resolved = {}
    for key in REQUIRED_PATHS:
        value = str(section.get(key) or "").strip()
        if not value:
            raise ConfigInvalid(f"paths.{key} must not be empty")
        resolved[key] = resolve(value, base_dir)
    report = str(section.get("report") or "outputs/report.json").strip()
    raw_epg = str(section.get("raw_epg") or "cache/raw_epg.xml").strip()
    return Paths(report=resolve(report, base_dir), raw_epg=resolve(raw_epg, base_dir), **resolved)


def build_config(cfg: dict, base_dir: Path = BASE_DIR) -> PipelineConfig:
    pipe = cfg.get("pipeline", {}) or {}
    prov = cfg.get("provider", {}) or {}

    try:
        refresh_hours = float(pipe.get("refresh_age_hours", 12))
        timeout = int(pipe.get("timeout_sec", 60))
    except (TypeError, ValueError) as e:
        raise ConfigInvalid(f"pipeline settings must be numeric :: {e}") from e
    if refresh_hours < 0:
        raise ConfigInvalid("pipeline.refresh_age_hours must be >= 0")
    if timeout <= 0:
        raise ConfigInvalid("pipeline.timeout_sec must be > 0")

    provider = Provider(
        base_url=str(prov.get("base_url") or "").strip(),
        username=str(prov.get("username") or "").strip(),
        password=str(prov.get("password") or "").strip(),
        playlist_endpoint=str(prov.get("playlist_endpoint") or "get.php").strip(),
        epg_endpoint=str(prov.get("epg_endpoint") or "xmltv.php").strip(),
    )

    return PipelineConfig(
        paths=_paths(cfg.get("paths", {}) or {}, base_dir),
        provider=provider,
        exclude=normalize_exclude(cfg.get("exclude")),
        refresh_age_sec=refresh_hours * 3600,
        extract_groups=bool(pipe.get("extract_groups", True)),
        epg_enabled=bool(pipe.get("epg_enabled", True)),
        user_agent=str(pipe.get("user_agent") or "ChannelLedger/1.0"),
        timeout_sec=timeout,
        debug=bool(pipe.get("debug", False)),
    )


def load_config(path: Optional[str] = None, base_dir: Path = BASE_DIR) -> PipelineConfig:
    cfg_path = Path(path).expanduser() if path else DEFAULT_CONFIG
    return build_config(load_yaml(cfg_path), base_dir)
