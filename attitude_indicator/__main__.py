from __future__ import annotations

import logging
import os

from .app import run

LOG_LEVEL_ENV = "ATTITUDE_INDICATOR_LOG_LEVEL"


def _configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main() -> int:
    """Open the indicator window; ``python -m attitude_indicator`` or ``attitude-indicator``."""
    _configure_logging()
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
