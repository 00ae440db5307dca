# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for grpc-health-probe."""

from ..transport.models import CallOptions, HeaderSet, HealthStatus
from .probe import ProbeConfig, ProbeOutcome, ProbeResult
from .tls import TLSDescriptor, VerificationMode

__all__ = [
    "CallOptions",
    "HeaderSet",
    "HealthStatus",
    "ProbeConfig",
    "ProbeOutcome",
    "ProbeResult",
    "TLSDescriptor",
    "VerificationMode",
]
