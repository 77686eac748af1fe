#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/epg.py
# [PROJECT] ChannelLedger
# [ROLE] XMLTV load / prune / write helpers
# [VERSION] v1.1
# [UPDATED] 2026-10-18
# ==============================================================================

import gzip
import zlib
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import AbstractSet, Tuple

from functions.errors import EpgEmpty, EpgParseFailed
from functions.paths import atomic_write

# EpgResult.status values
WRITTEN = "written"
DISABLED = "disabled"
FETCH_FAILED = "fetch_failed"
EMPTY = "empty"
NO_IDS = "no_ids"
PARSE_FAILED = "parse_failed"
WRITE_FAILED = "write_failed"


@dataclass
class EpgResult:
    status: str
    reason: str = ""
    channels: int = 0
    programmes: int = 0
    channels_removed: int = 0
    programmes_removed: int = 0

    @property
    def written(self) -> bool:
        return self.status == WRITTEN

    def as_dict(self) -> dict:
        return {
            "status": self.status,
            "reason": self.reason,
            "channels": self.channels,
            "programmes": self.programmes,
            "channels_removed": self.channels_removed,
            "programmes_removed": self.programmes_removed,
        }


GZIP_MAGIC = b"\x1f\x8b"
BLANK_CHECK_BYTES = 64 * 1024


def open_xml_stream(path: Path):
    # providers serve xmltv.php either plain or gzipped regardless of name
    with path.open("rb") as f:
        magic = f.read(2)
    if path.name.lower().endswith(".gz") or magic == GZIP_MAGIC:
        return gzip.open(path, "rb")
    return path.open("rb")


def load_epg(path: Path) -> ET.Element:
    if not path.exists() or path.stat().st_size == 0:
        raise EpgEmpty(f"empty EPG document: {path}")
    if path.stat().st_size <= BLANK_CHECK_BYTES and not path.read_bytes().strip():
        raise EpgEmpty(f"blank EPG document: {path}")
    try:
        with open_xml_stream(path) as f:
            return ET.parse(f).getroot()
    except (ET.ParseError, gzip.BadGzipFile, zlib.error, EOFError) as e:
        raise EpgParseFailed(f"{path.name} :: {e}") from e


def prune_epg(root: ET.Element, retained: AbstractSet[str]) -> Tuple[int, int]:
    """
    Remove <channel> records whose id is not retained and <programme> records
    whose channel is not retained, in place. Survivors keep their order.
    Returns (channels_removed, programmes_removed).
    """
    drop_channels = [el for el in root.findall("channel") if (el.get("id") or "").strip() not in retained]
    drop_programmes = [el for el in root.findall("programme") if (el.get("channel") or "").strip() not in retained]
    for el in drop_channels + drop_programmes:
        root.remove(el)
    return len(drop_channels), len(drop_programmes)


def write_epg(root: ET.Element, path: Path) -> None:
    data = ET.tostring(root, encoding="utf-8")
    with atomic_write(path, "wb") as f:
        if path.name.lower().endswith(".gz"):
            with gzip.GzipFile(fileobj=f, mode="wb") as gz:
                gz.write(b'<?xml version="1.0" encoding="UTF-8"?>\n')
                gz.write(data)
        else:
            f.write(b'<?xml version="1.0" encoding="UTF-8"?>\n')
            f.write(data)
