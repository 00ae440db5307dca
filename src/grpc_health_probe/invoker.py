# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""The single health Check call and its classification."""

from __future__ import annotations

import logging
import time

from .errors import HealthRpcError, categorize_rpc_error, error_category_to_reason
from .models.probe import ProbeResult
from .transport.client import HealthChannel
from .transport.models import CallOptions, HeaderSet, HealthStatus

logger = logging.getLogger(__name__)


def check_health(
    channel: HealthChannel,
    service: str,
    headers: HeaderSet,
    rpc_timeout: float,
    *,
    gzip: bool = False,
    log: logging.Logger | None = None,
) -> ProbeResult:
    """Ask ``channel`` for the status of ``service`` ("" is the whole server)."""
    log = log or logger
    options = CallOptions(timeout=rpc_timeout, metadata=headers, gzip=gzip)
    started = time.monotonic()
    try:
        status = channel.check(service, options)
    except HealthRpcError as exc:
        category = categorize_rpc_error(exc.code)
        reason = error_category_to_reason(category, rpc_timeout=rpc_timeout)
        if reason:
            log.error(reason)
        log.error("health rpc failed with error: %s", exc)
        return ProbeResult.rpc_error(exc.code, exc.details, category)

    if status is not HealthStatus.SERVING:
        result = ProbeResult.unhealthy(status)
        log.info(result.message)
        return result

    log.debug("rpc complete (took %.3fs)", time.monotonic() - started)
    log.info("status: %s", status.name)
    return ProbeResult.serving()


__all__ = ["check_health"]
