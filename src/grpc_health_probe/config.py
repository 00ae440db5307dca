# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for grpc-health-probe."""

import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = "grpc_health_probe"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value


@dataclass
class ProbeSettings:
    """Defaults for CLI options that are not given explicitly."""

    user_agent: str = DEFAULT_USER_AGENT
    connection_timeout: float = 1.0
    rpc_timeout: float = 1.0

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        connection_timeout = _float_env("GRPC_HEALTH_PROBE_CONNECTION_TIMEOUT", cls.connection_timeout)
        if connection_timeout <= 0:
            connection_timeout = cls.connection_timeout
        rpc_timeout = _float_env("GRPC_HEALTH_PROBE_RPC_TIMEOUT", cls.rpc_timeout)
        if rpc_timeout <= 0:
            rpc_timeout = cls.rpc_timeout
        return cls(
            user_agent=_str_env("GRPC_HEALTH_PROBE_USER_AGENT", cls.user_agent),
            connection_timeout=connection_timeout,
            rpc_timeout=rpc_timeout,
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe defaults from environment."""
    return ProbeSettings.from_env()
