# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

from enum import Enum

import grpc


class ProbeError(Exception):
    """Base class for failures that end a probe run."""


class ValidationError(ProbeError):
    """Invalid arguments, detected before any I/O."""


class ConnectionFailedError(ProbeError):
    """The transport could not be established (dial, TLS material, timeout)."""


class HealthRpcError(ProbeError):
    """Structured failure of the Check RPC once a channel is open."""

    def __init__(self, code: grpc.StatusCode, details: str | None = None):
        self.code = code
        self.details = details or ""
        super().__init__(f"rpc error: code = {code.name} desc = {self.details}")


class RpcErrorCategory(str, Enum):
    UNIMPLEMENTED = "UNIMPLEMENTED"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"
    OTHER = "OTHER"


def categorize_rpc_error(code: grpc.StatusCode | None) -> RpcErrorCategory:
    """
    Map a gRPC status code to RpcErrorCategory.

    The category only drives diagnostics; every category exits the same way.
    """
    if code == grpc.StatusCode.UNIMPLEMENTED:
        return RpcErrorCategory.UNIMPLEMENTED
    if code == grpc.StatusCode.DEADLINE_EXCEEDED:
        return RpcErrorCategory.DEADLINE_EXCEEDED
    return RpcErrorCategory.OTHER


def error_category_to_reason(category: RpcErrorCategory | None, *, rpc_timeout: float | None = None) -> str:
    """User-facing reason string."""
    if category == RpcErrorCategory.UNIMPLEMENTED:
        return "this server does not implement the grpc health protocol (grpc.health.v1.Health)"
    if category == RpcErrorCategory.DEADLINE_EXCEEDED:
        if rpc_timeout is None:
            return "timeout: health rpc did not complete in time"
        return f"timeout: health rpc did not complete within {rpc_timeout:g}s"
    return ""


__all__ = [
    "ConnectionFailedError",
    "HealthRpcError",
    "ProbeError",
    "RpcErrorCategory",
    "ValidationError",
    "categorize_rpc_error",
    "error_category_to_reason",
]
