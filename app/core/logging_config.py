import logging
import os
import sys
from typing import Optional, Union


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        return value if isinstance(value, int) else logging.INFO
    return level


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Configure root logging for the API and the CLI.

    - Logs go to stdout, format: time [LEVEL] logger - message
    - Level comes from the argument, else LOG_LEVEL, else INFO
    - Applied once; if uvicorn (or pytest) already installed handlers only
      the level is adjusted
    """
    resolved = _resolve_level(level)
    root = logging.getLogger()

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(max(resolved, logging.INFO))

    if root.handlers:
        root.setLevel(resolved)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(handler)
    root.setLevel(resolved)
