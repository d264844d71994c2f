"""
Process-wide logging setup (stdlib `logging`).

Modules log through `logging.getLogger(__name__)`; this only configures the
root handler once at startup.
"""

from __future__ import annotations

import logging

from . import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    resolved = (level or settings.log_level()).upper()
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    # basicConfig is a no-op once handlers exist; keep the level in sync anyway.
    logging.getLogger().setLevel(resolved)
