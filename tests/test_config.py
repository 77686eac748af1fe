"""Tests for YAML config loading and validation."""

import pytest

from functions.config import build_config, load_config
from functions.errors import ConfigInvalid


class TestBuildConfig:
    def test_paths_resolve_against_base(self, cfg, tmp_path):
        assert cfg.paths.raw_playlist == tmp_path / "cache" / "raw.m3u"
        assert cfg.paths.raw_epg == tmp_path / "cache" / "raw_epg.xml"
        assert cfg.paths.report == tmp_path / "outputs" / "report.json"

    def test_absolute_paths_kept(self, raw_cfg, tmp_path):
        raw_cfg["paths"]["epg_output"] = str(tmp_path / "elsewhere" / "epg.xml")
        cfg = build_config(raw_cfg, base_dir=tmp_path / "base")
        assert cfg.paths.epg_output == tmp_path / "elsewhere" / "epg.xml"

    def test_exclude_lowercased(self, raw_cfg, tmp_path):
        raw_cfg["exclude"] = ["PPV", "  Adult ", "", None]
        cfg = build_config(raw_cfg, base_dir=tmp_path)
        assert cfg.exclude == {"ppv", "adult"}

    def test_refresh_hours_to_seconds(self, raw_cfg, tmp_path):
        raw_cfg["pipeline"]["refresh_age_hours"] = 1.5
        assert build_config(raw_cfg, base_dir=tmp_path).refresh_age_sec == 5400

    def test_defaults(self, tmp_path):
        cfg = build_config(
            {"paths": {"raw_playlist": "a", "filtered_playlist": "b", "groups_list": "c", "epg_output": "d"}},
            base_dir=tmp_path,
        )
        assert cfg.extract_groups is True
        assert cfg.epg_enabled is True
        assert cfg.exclude == frozenset()
        assert cfg.provider.playlist_endpoint == "get.php"

    @pytest.mark.parametrize("key", ["raw_playlist", "filtered_playlist", "groups_list", "epg_output"])
    def test_empty_required_path(self, raw_cfg, tmp_path, key):
        raw_cfg["paths"][key] = "  "
        with pytest.raises(ConfigInvalid, match=key):
            build_config(raw_cfg, base_dir=tmp_path)

    def test_negative_refresh_age(self, raw_cfg, tmp_path):
        raw_cfg["pipeline"]["refresh_age_hours"] = -1
        with pytest.raises(ConfigInvalid):
            build_config(raw_cfg, base_dir=tmp_path)

    def test_non_numeric_timeout(self, raw_cfg, tmp_path):
        raw_cfg["pipeline"]["timeout_sec"] = "soon"
        with pytest.raises(ConfigInvalid):
            build_config(raw_cfg, base_dir=tmp_path)

    def test_provider_required_only_for_download(self, raw_cfg, tmp_path):
        raw_cfg["provider"] = {"base_url": "http://x"}
        cfg = build_config(raw_cfg, base_dir=tmp_path)
        with pytest.raises(ConfigInvalid, match="username"):
            cfg.require_provider()


class TestLoadConfig:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigInvalid):
            load_config(str(tmp_path / "nope.yml"))

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "cfg.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigInvalid):
            load_config(str(path))

    def test_bad_yaml(self, tmp_path):
        path = tmp_path / "cfg.yml"
        path.write_text("paths: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigInvalid):
            load_config(str(path))

    def test_loads_file(self, tmp_path):
        path = tmp_path / "cfg.yml"
        path.write_text(
            "exclude: [XXX]\n"
            "pipeline:\n  epg_enabled: false\n"
            "paths:\n  raw_playlist: r.m3u\n  filtered_playlist: f.m3u\n"
            "  groups_list: g.txt\n  epg_output: e.xml\n",
            encoding="utf-8",
        )
        cfg = load_config(str(path), base_dir=tmp_path)
        assert cfg.epg_enabled is False
        assert cfg.exclude == {"xxx"}
        assert cfg.paths.groups_list == tmp_path / "g.txt"

    def test_shipped_example_config(self):
        cfg = load_config()
        assert cfg.paths.epg_output.name == "epg.xml.gz"
        assert "ppv" in cfg.exclude
