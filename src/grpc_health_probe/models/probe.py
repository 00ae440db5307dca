# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe configuration and result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import grpc

from ..config import DEFAULT_USER_AGENT
from ..errors import RpcErrorCategory
from ..transport.models import HealthStatus


@dataclass(frozen=True)
class ProbeConfig:
    """Snapshot of the probe inputs; checked by ``validation.validate``."""

    address: str
    service: str = ""
    user_agent: str = DEFAULT_USER_AGENT
    rpc_headers: tuple[str, ...] = field(default_factory=tuple)
    connection_timeout: float = 1.0
    rpc_timeout: float = 1.0
    tls: bool = False
    tls_no_verify: bool = False
    tls_ca_cert: str | None = None
    tls_client_cert: str | None = None
    tls_client_key: str | None = None
    tls_server_name: str | None = None
    gzip: bool = False
    verbose: bool = False


class ProbeOutcome(str, Enum):
    SERVING = "SERVING"
    UNHEALTHY = "UNHEALTHY"
    RPC_ERROR = "RPC_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


@dataclass(frozen=True)
class ProbeResult:
    outcome: ProbeOutcome
    message: str = ""
    status: HealthStatus | None = None
    code: grpc.StatusCode | None = None
    category: RpcErrorCategory | None = None

    @classmethod
    def serving(cls) -> ProbeResult:
        return cls(ProbeOutcome.SERVING, status=HealthStatus.SERVING)

    @classmethod
    def unhealthy(cls, status: HealthStatus) -> ProbeResult:
        return cls(ProbeOutcome.UNHEALTHY, message=f"service unhealthy (responded with {status.name})", status=status)

    @classmethod
    def rpc_error(
        cls, code: grpc.StatusCode, message: str, category: RpcErrorCategory = RpcErrorCategory.OTHER
    ) -> ProbeResult:
        return cls(ProbeOutcome.RPC_ERROR, message=message, code=code, category=category)

    @classmethod
    def connection_error(cls, reason: str) -> ProbeResult:
        return cls(ProbeOutcome.CONNECTION_ERROR, message=reason)

    @classmethod
    def validation_error(cls, message: str) -> ProbeResult:
        return cls(ProbeOutcome.VALIDATION_ERROR, message=message)
