# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pre-flight argument checks. Nothing here touches the network or the filesystem."""

from __future__ import annotations

import math

from .errors import ValidationError
from .headers import split_header
from .models.probe import ProbeConfig


def validate(config: ProbeConfig) -> ProbeConfig:
    """Return ``config`` unchanged if every rule holds, else raise ValidationError."""
    if not config.address:
        raise ValidationError("address not specified")

    for header in config.rpc_headers:
        if split_header(header) is None:
            raise ValidationError(f"invalid RPC header, expected 'key: value', got {header}")

    if not (math.isfinite(config.connection_timeout) and config.connection_timeout > 0):
        raise ValidationError(
            f"--connection-timeout must be greater than zero (specified: {config.connection_timeout:g})"
        )
    if not (math.isfinite(config.rpc_timeout) and config.rpc_timeout > 0):
        raise ValidationError(f"--rpc-timeout must be greater than zero (specified: {config.rpc_timeout:g})")

    if not config.tls:
        if config.tls_no_verify:
            raise ValidationError("specified --tls-no-verify without specifying --tls")
        if config.tls_ca_cert is not None:
            raise ValidationError("specified --tls-ca-cert without specifying --tls")
        if config.tls_client_cert is not None:
            raise ValidationError("specified --tls-client-cert without specifying --tls")
        if config.tls_server_name is not None:
            raise ValidationError("specified --tls-server-name without specifying --tls")

    if config.tls_client_cert is not None and config.tls_client_key is None:
        raise ValidationError("specified --tls-client-cert without specifying --tls-client-key")
    if config.tls_client_key is not None and config.tls_client_cert is None:
        raise ValidationError("specified --tls-client-key without specifying --tls-client-cert")

    if config.tls_ca_cert is not None and config.tls_no_verify:
        raise ValidationError("cannot specify --tls-ca-cert with --tls-no-verify (CA cert would not be used)")
    if config.tls_server_name is not None and config.tls_no_verify:
        raise ValidationError(
            "cannot specify --tls-server-name with --tls-no-verify (server name would not be used)"
        )

    return config


def parse_address(address: str) -> tuple[str, int]:
    """Split ``host:port``; bracketed IPv6 hosts keep their brackets."""
    host, sep, port_text = str(address).strip().rpartition(":")
    if not sep or not host or not (port_text.isascii() and port_text.isdigit()):
        raise ValidationError(f"invalid address {address!r}, expected host:port")
    port = int(port_text)
    if not 0 < port < 65536:
        raise ValidationError(f"invalid port in address {address!r}")
    if host.startswith("[") != host.endswith("]"):
        raise ValidationError(f"invalid host in address {address!r}")
    return host, port


__all__ = ["parse_address", "validate"]
