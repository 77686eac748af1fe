#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/http.py
# [PROJECT] ChannelLedger
# [ROLE] Provider URL building, streamed download to file, staleness check
# [VERSION] v1.1
# [UPDATED] 2026-10-18
# ==============================================================================

import logging
import time
from pathlib import Path
from typing import Optional
from urllib.parse import urlencode

import requests

from functions.errors import FetchFailed
from functions.paths import atomic_write

CHUNK_SIZE = 1024 * 256


def build_url(base_url: str, endpoint: str, params: dict) -> str:
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}?{urlencode(params)}"


def fetch_to_file(url: str, dest: Path, user_agent: str = None, timeout_sec: int = 60) -> int:
    """
    Stream `url` into `dest` in chunks. Returns bytes written.
    Raises FetchFailed on transport errors or a non-success status; `dest` is
    only replaced once the whole body has been received.
    """
    headers = {"User-Agent": user_agent or "ChannelLedger/1.0"}
    written = 0
    try:
        with requests.get(url, timeout=timeout_sec, headers=headers, stream=True) as r:
            r.raise_for_status()
            with atomic_write(dest, "wb") as f:
                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        raise FetchFailed(f"http={status}") from e
    except requests.RequestException as e:
        raise FetchFailed(f"exc={type(e).__name__}") from e
    logging.info("Downloaded %d bytes -> %s", written, dest)
    return written


def file_age(path: Path, now: Optional[float] = None) -> Optional[float]:
    if not path.exists():
        return None
    return (now if now is not None else time.time()) - path.stat().st_mtime


def is_stale(path: Path, max_age_sec: float, now: Optional[float] = None) -> bool:
    """Missing files are stale; otherwise only an age strictly above the threshold is."""
    age = file_age(path, now)
    return age is None or age > max_age_sec
