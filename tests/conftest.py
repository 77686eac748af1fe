"""Shared fixtures: sample feeds, a config rooted in tmp_path, a fake requests.get."""

import gzip

import pytest
import requests

from functions.config import build_config

RAW_M3U = """#EXTM3U
#EXTINF:-1 tvg-id="cnn.us" tvg-name="CNN" group-title="News",CNN HD
http://provider.example/live/u/p/1.ts
#EXTINF:-1 tvg-id="box.us" tvg-name="Boxing" group-title="News",PPV Boxing Night
http://provider.example/live/u/p/2.ts
#EXTINF:-1 tvg-id="espn.us" tvg-name="ESPN" group-title="Sports",ESPN
http://provider.example/live/u/p/3.ts
#EXTINF:-1 tvg-id="" tvg-name="Local" group-title="News",Local News
http://provider.example/live/u/p/4.ts
#EXTINF:-1 tvg-id="film.us" group-title="Movies",Film 24/7
http://provider.example/live/u/p/5.ts
"""

EPG_XML = """<?xml version="1.0" encoding="UTF-8"?>
<tv generator-info-name="provider">
  <channel id="cnn.us"><display-name>CNN</display-name></channel>
  <channel id="espn.us"><display-name>ESPN</display-name></channel>
  <channel id="film.us"><display-name>Film</display-name></channel>
  <programme start="20261018060000 +0000" stop="20261018070000 +0000" channel="cnn.us"><title>Morning</title></programme>
  <programme start="20261018060000 +0000" stop="20261018070000 +0000" channel="espn.us"><title>Game</title></programme>
  <programme start="20261018070000 +0000" stop="20261018080000 +0000" channel="cnn.us"><title>Noon</title></programme>
</tv>
"""


class FakeResponse:
    def __init__(self, body: bytes, status_code: int = 200):
        self.body = body
        self.status_code = status_code

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.body), chunk_size):
            yield self.body[i:i + chunk_size]


class FakeProvider:
    """Routes get.php / xmltv.php to canned bodies and records every call."""

    def __init__(self, playlist=RAW_M3U, epg=EPG_XML):
        self.routes = {
            "get.php": playlist,
            "xmltv.php": epg,
        }
        self.calls = []

    def get(self, url, timeout=None, headers=None, stream=False):
        self.calls.append(url)
        for endpoint, body in self.routes.items():
            if f"/{endpoint}?" in url:
                if isinstance(body, Exception):
                    raise body
                if isinstance(body, int):
                    return FakeResponse(b"", status_code=body)
                return FakeResponse(body.encode("utf-8") if isinstance(body, str) else body)
        return FakeResponse(b"", status_code=404)


@pytest.fixture()
def provider(monkeypatch):
    fake = FakeProvider()
    monkeypatch.setattr("functions.http.requests.get", fake.get)
    return fake


@pytest.fixture()
def raw_cfg(tmp_path):
    return {
        "provider": {"base_url": "http://provider.example", "username": "u", "password": "p"},
        "pipeline": {"refresh_age_hours": 12, "extract_groups": True, "epg_enabled": True},
        "exclude": ["PPV"],
        "paths": {
            "raw_playlist": "cache/raw.m3u",
            "filtered_playlist": "outputs/channels.m3u",
            "groups_list": "config/groups.txt",
            "epg_output": "outputs/epg.xml",
        },
    }


@pytest.fixture()
def cfg(raw_cfg, tmp_path):
    return build_config(raw_cfg, base_dir=tmp_path)


def corrupt_gzip(text: str) -> bytes:
    """Valid gzip header and trailer around a scrambled deflate body."""
    data = bytearray(gzip.compress(text.encode("utf-8")))
    for i in range(10, len(data) - 8):
        data[i] ^= 0x5A
    return bytes(data)
