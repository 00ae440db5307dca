# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Health-check request/response data models used across grpc-health-probe."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

HeaderSet = tuple[tuple[str, str], ...]


class HealthStatus(IntEnum):
    """``grpc.health.v1.HealthCheckResponse.ServingStatus`` values."""

    UNKNOWN = 0
    SERVING = 1
    NOT_SERVING = 2
    SERVICE_UNKNOWN = 3

    @classmethod
    def from_wire(cls, value: int) -> HealthStatus:
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class CallOptions:
    """Per-call options for the single Check RPC."""

    timeout: float
    metadata: HeaderSet = field(default_factory=tuple)
    gzip: bool = False
