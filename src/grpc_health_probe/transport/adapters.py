# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory transports for tests and dry runs."""

from __future__ import annotations

from ..errors import ConnectionFailedError, HealthRpcError
from ..models.tls import TLSDescriptor
from .client import HealthChannel
from .models import CallOptions, HealthStatus


class StubHealthChannel(HealthChannel):
    """Deterministic, programmable HealthChannel for tests."""

    def __init__(self, statuses: dict[str, HealthStatus] | None = None, error: HealthRpcError | None = None):
        self._statuses = statuses or {}
        self._error = error
        self.calls: list[tuple[str, CallOptions]] = []
        self.close_count = 0

    def check(self, service: str, options: CallOptions) -> HealthStatus:
        self.calls.append((service, options))
        if self._error is not None:
            raise self._error
        return self._statuses.get(service, HealthStatus.SERVICE_UNKNOWN)

    def close(self) -> None:
        self.close_count += 1


class StubChannelFactory:
    """ChannelFactory returning a prepared channel, or failing like an unreachable target."""

    def __init__(self, channel: HealthChannel | None = None, error: Exception | None = None):
        self.channel = channel
        self.error = error
        self.dials: list[tuple[str, int, TLSDescriptor | None, float]] = []

    def __call__(self, host: str, port: int, security: TLSDescriptor | None, timeout: float) -> HealthChannel:
        self.dials.append((host, port, security, timeout))
        if self.error is not None:
            raise self.error
        if self.channel is None:
            raise ConnectionFailedError(f"no stubbed channel for {host}:{port}")
        return self.channel
