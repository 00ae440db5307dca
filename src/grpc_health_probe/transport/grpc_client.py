# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""grpcio-backed HealthChannel implementation."""

from __future__ import annotations

import time

import grpc
from grpc_health.v1 import health_pb2, health_pb2_grpc

from ..errors import ConnectionFailedError, HealthRpcError
from ..models.tls import TLSDescriptor
from ..tls import channel_credentials
from .client import HealthChannel
from .models import CallOptions, HealthStatus

# HealthCheckResponse is a few bytes; anything larger after gzip decoding is refused.
MAX_DECOMPRESSED_RESPONSE_BYTES = 64 * 1024


class GrpcHealthChannel(HealthChannel):
    """Synchronous grpc channel wrapper bound to the Health service."""

    def __init__(self, channel: grpc.Channel):
        self._channel = channel
        self._stub = health_pb2_grpc.HealthStub(channel)
        self.closed = False

    def check(self, service: str, options: CallOptions) -> HealthStatus:
        request = health_pb2.HealthCheckRequest(service=service)
        try:
            response = self._stub.Check(
                request,
                timeout=options.timeout,
                metadata=list(options.metadata),
                compression=grpc.Compression.Gzip if options.gzip else None,
            )
        except grpc.RpcError as exc:
            code = exc.code() if callable(getattr(exc, "code", None)) else grpc.StatusCode.UNKNOWN
            details = exc.details() if callable(getattr(exc, "details", None)) else str(exc)
            raise HealthRpcError(code, details) from exc
        return HealthStatus.from_wire(response.status)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._channel.close()


class GrpcChannelFactory:
    """Dial a grpc channel and wait for it to become ready within the connection timeout."""

    def __init__(self, *, user_agent: str | None = None, gzip: bool = False):
        self.user_agent = user_agent
        self.gzip = gzip

    def channel_options(self, timeout: float) -> list[tuple[str, object]]:
        timeout_ms = max(1, int(timeout * 1000))
        options: list[tuple[str, object]] = [
            ("grpc.keepalive_timeout_ms", timeout_ms),
            # The Check call is never retried.
            ("grpc.enable_retries", 0),
        ]
        if self.user_agent:
            options.append(("grpc.primary_user_agent", self.user_agent))
        if self.gzip:
            options.append(("grpc.max_receive_message_length", MAX_DECOMPRESSED_RESPONSE_BYTES))
        return options

    def __call__(
        self, host: str, port: int, security: TLSDescriptor | None, timeout: float
    ) -> GrpcHealthChannel:
        target = f"{host}:{port}"
        deadline = time.monotonic() + timeout
        options = self.channel_options(timeout)
        if security is None:
            channel = grpc.insecure_channel(target, options=options)
        else:
            # The certificate fetch for unverified TLS spends from the same budget.
            credentials, tls_options = channel_credentials(security, host, port, timeout)
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise ConnectionFailedError(f"failed to connect to {target} within {timeout:g}s")
            channel = grpc.secure_channel(target, credentials, options=options + tls_options)

        try:
            grpc.channel_ready_future(channel).result(timeout=max(0.0, deadline - time.monotonic()))
        except grpc.FutureTimeoutError as exc:
            channel.close()
            raise ConnectionFailedError(f"failed to connect to {target} within {timeout:g}s") from exc
        except Exception as exc:  # noqa: BLE001
            channel.close()
            raise ConnectionFailedError(f"failed to connect to {target}: {exc}") from exc
        return GrpcHealthChannel(channel)
