# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport exports."""

from .models import CallOptions, HeaderSet, HealthStatus
from .client import ChannelFactory, HealthChannel, create_default_channel_factory
from .adapters import StubChannelFactory, StubHealthChannel
from .grpc_client import GrpcChannelFactory, GrpcHealthChannel

__all__ = [
    "CallOptions",
    "ChannelFactory",
    "GrpcChannelFactory",
    "GrpcHealthChannel",
    "HeaderSet",
    "HealthChannel",
    "HealthStatus",
    "StubChannelFactory",
    "StubHealthChannel",
    "create_default_channel_factory",
]
