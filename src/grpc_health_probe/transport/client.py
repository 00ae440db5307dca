# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Health channel abstraction and factory."""

from typing import Protocol

from ..models.tls import TLSDescriptor
from .models import CallOptions, HealthStatus


class HealthChannel(Protocol):
    """An open transport that can answer a health Check."""

    def check(self, service: str, options: CallOptions) -> HealthStatus: ...

    def close(self) -> None: ...


class ChannelFactory(Protocol):
    """Dial ``host:port`` within ``timeout`` seconds or raise ConnectionFailedError."""

    def __call__(
        self, host: str, port: int, security: TLSDescriptor | None, timeout: float
    ) -> HealthChannel: ...


def create_default_channel_factory(*, user_agent: str | None = None, gzip: bool = False) -> ChannelFactory:
    """Factory for the default grpcio-backed channel."""
    from .grpc_client import GrpcChannelFactory

    return GrpcChannelFactory(user_agent=user_agent, gzip=gzip)
