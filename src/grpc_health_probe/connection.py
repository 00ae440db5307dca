# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Connection lifecycle: one bounded dial, one close."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager

from .errors import ConnectionFailedError
from .models.tls import TLSDescriptor
from .transport.client import ChannelFactory, HealthChannel

logger = logging.getLogger(__name__)


@contextmanager
def open_connection(
    factory: ChannelFactory,
    host: str,
    port: int,
    security: TLSDescriptor | None,
    timeout: float,
    *,
    log: logging.Logger | None = None,
) -> Iterator[HealthChannel]:
    """
    Dial ``host:port`` and yield the open channel.

    Every dial failure surfaces as ConnectionFailedError. The channel is closed when the
    block exits, whichever way it exits.
    """
    log = log or logger
    log.debug("establishing connection to %s:%s (%s)", host, port, "tls" if security else "plaintext")
    started = time.monotonic()
    try:
        channel = factory(host, port, security, timeout)
    except ConnectionFailedError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise ConnectionFailedError(f"failed to connect to {host}:{port}: {exc}") from exc
    log.debug("connection established (took %.3fs)", time.monotonic() - started)

    try:
        yield channel
    finally:
        channel.close()


__all__ = ["open_connection"]
