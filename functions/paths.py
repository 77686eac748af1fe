#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/paths.py
# [PROJECT] ChannelLedger
# [ROLE] Path helpers for config, logs and atomic file replacement
# [VERSION] v1.1
# [UPDATED] 2026-10-18
# ==============================================================================

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path

BASE_DIR = Path(__file__).parent.parent
CONFIG_DIR = BASE_DIR / "config"
LOGS_DIR = BASE_DIR / "logs"
DEFAULT_CONFIG = CONFIG_DIR / "channelledger.yml"


def resolve(path: str, base_dir: Path = BASE_DIR) -> Path:
    p = Path(path).expanduser()
    return p if p.is_absolute() else base_dir / p


def log_path(step: str) -> Path:
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    return LOGS_DIR / f"{step}.log"


def file_mode(dest: Path) -> int:
    if dest.exists():
        return dest.stat().st_mode & 0o777
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


@contextmanager
def atomic_write(dest: Path, mode: str = "w", **kwargs):
    """
    Yield a file object for a temp file beside `dest`; on clean exit the temp
    file replaces `dest`, on error it is removed and `dest` is left untouched.
    """
    dest = Path(dest)
    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{dest.name}.", suffix=".tmp", dir=str(dest.parent))
    os.close(fd)
    try:
        # mkstemp files are 0600; keep the mode a plain open() would have given
        os.chmod(tmp, file_mode(dest))
        with open(tmp, mode, **kwargs) as f:
            yield f
        os.replace(tmp, dest)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
