# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
grpc-health-probe package entrypoint.

This package checks a single gRPC server through the standard grpc.health.v1.Health
protocol and reports the outcome as one of five exit codes. The transport is abstracted
behind an injectable channel factory, and domain objects are modeled with typed
dataclasses.
"""

from .config import ProbeSettings, load_probe_settings
from .errors import ConnectionFailedError, HealthRpcError, ProbeError, ValidationError
from .exit_codes import ExitStatus, exit_code_for
from .log import setup_logging
from .models import HealthStatus, ProbeConfig, ProbeOutcome, ProbeResult, TLSDescriptor
from .runtime import HealthProbe, run_probe
from .transport import ChannelFactory, GrpcChannelFactory, HealthChannel
from .version import __version__

__all__ = [
    "ChannelFactory",
    "ConnectionFailedError",
    "ExitStatus",
    "GrpcChannelFactory",
    "HealthChannel",
    "HealthProbe",
    "HealthRpcError",
    "HealthStatus",
    "ProbeConfig",
    "ProbeError",
    "ProbeOutcome",
    "ProbeResult",
    "ProbeSettings",
    "TLSDescriptor",
    "ValidationError",
    "exit_code_for",
    "load_probe_settings",
    "run_probe",
    "setup_logging",
    "__version__",
]
