# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for the Nylas client core."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "NYLAS_LOG_LEVEL"
FALLBACK_LOG_LEVEL = "WARNING"


def resolve_log_level(level: str | None = None) -> int:
    """Explicit level, else NYLAS_LOG_LEVEL, else WARNING; unknown names fall back to WARNING."""
    name = (level or os.getenv(LOG_LEVEL_ENV) or FALLBACK_LOG_LEVEL).strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI use; the library itself only emits through module loggers."""
    logging.basicConfig(
        level=resolve_log_level(level),
        format="%(levelname)s %(name)s: %(message)s",
    )


__all__ = ["resolve_log_level", "setup_logging"]
