# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for authprobe."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("AUTHPROBE_LOG_LEVEL", "WARNING").upper()

# Third-party loggers that repeat what the CLIs already print (one line per request).
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(level: str | None = None, *, verbose: bool = False) -> None:
    """
    Configure standard logging for CLI/library use.

    ``verbose`` switches authprobe to DEBUG and lets the HTTP stack log too;
    otherwise those libraries stay at WARNING whatever the root level is.
    """
    effective_level = "DEBUG" if verbose else (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    if not verbose:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging"]
