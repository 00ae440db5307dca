# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for grpc-health-probe."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("GRPC_HEALTH_PROBE_LOG_LEVEL", "INFO").upper()


def setup_logging(level: str | None = None, *, verbose: bool = False) -> None:
    """Configure standard logging for CLI use; ``verbose`` forces DEBUG."""
    effective_level = "DEBUG" if verbose else (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


__all__ = ["setup_logging"]
