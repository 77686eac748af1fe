#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/runner.py
# [PROJECT] ChannelLedger
# [ROLE] Shared entrypoint plumbing: logging setup, report + fatal error files
# [VERSION] v1.0
# [UPDATED] 2026-10-18
# ==============================================================================

import json
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional

from functions.errors import ChannelLedgerError
from functions.paths import LOGS_DIR, log_path

__app__ = "ChannelLedger"
__version__ = "1.0.0"

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def setup_logging(step: str, debug: bool = False) -> None:
    logging.basicConfig(
        filename=log_path(step),
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )


def utc_timestamp() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def write_json(path: Path, obj: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, ensure_ascii=False), encoding="utf-8")


def config_arg(argv: Optional[List[str]] = None) -> Optional[str]:
    """The only accepted argument is an optional config file path."""
    args = sys.argv[1:] if argv is None else argv
    return args[0] if args else None


def run_main(component: str, main: Callable[[], int]) -> int:
    """
    Run a step's main(). Pipeline errors and unexpected exceptions are logged,
    recorded in logs/<component>.error.json and turned into exit code 2.
    """
    try:
        return main()
    except (ChannelLedgerError, OSError) as e:
        logging.error("%s failed: %s: %s", component, type(e).__name__, e)
        err_type, err = type(e).__name__, str(e)
    except Exception as e:
        logging.exception("%s crashed", component)
        err_type, err = type(e).__name__, str(e)

    write_json(
        LOGS_DIR / f"{component}.error.json",
        {
            "timestamp_utc": utc_timestamp(),
            "app": __app__,
            "component": component,
            "version": __version__,
            "error_type": err_type,
            "error": err,
        },
    )
    print(f"FATAL: {err_type}: {err}", file=sys.stderr)
    return 2
