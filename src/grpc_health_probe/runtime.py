# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade running one health probe end to end."""

from __future__ import annotations

import logging

from .connection import open_connection
from .errors import ConnectionFailedError, ValidationError
from .headers import compose_headers, format_headers
from .invoker import check_health
from .models.probe import ProbeConfig, ProbeResult
from .models.tls import TLSDescriptor
from .tls import build_tls_descriptor
from .transport.client import ChannelFactory, create_default_channel_factory
from .transport.models import HeaderSet
from .validation import parse_address, validate

logger = logging.getLogger("grpc_health_probe")


class HealthProbe:
    """
    Wires validation, TLS material, the connection and the Check call for one config.

    ``run`` never raises for probe failures; every outcome comes back as a ProbeResult.
    A channel factory can be injected to run the pipeline without a network.
    """

    def __init__(
        self,
        config: ProbeConfig,
        *,
        channel_factory: ChannelFactory | None = None,
        log: logging.Logger | None = None,
    ):
        self.config = config
        self.channel_factory = channel_factory
        self.log = log or logger

    def _log_options(self, headers: HeaderSet) -> None:
        config = self.config
        self.log.debug(
            "Parsed options:\n"
            "> address: %s\n"
            "> service: %s\n"
            "> user-agent: %s\n"
            "> connection-timeout: %g\n"
            "> rpc-timeout: %g\n"
            "> rpc-headers: %s\n"
            "> tls: %s\n"
            "> tls-no-verify: %s\n"
            "> tls-ca-cert: %s\n"
            "> tls-client-cert: %s\n"
            "> tls-client-key: %s\n"
            "> tls-server-name: %s\n"
            "> gzip: %s\n"
            "> verbose: %s",
            config.address,
            config.service,
            config.user_agent,
            config.connection_timeout,
            config.rpc_timeout,
            format_headers(headers),
            config.tls,
            config.tls_no_verify,
            config.tls_ca_cert,
            config.tls_client_cert,
            config.tls_client_key,
            config.tls_server_name,
            config.gzip,
            config.verbose,
        )

    def _security(self) -> TLSDescriptor | None:
        config = self.config
        if not config.tls:
            return None
        return build_tls_descriptor(
            ca_cert=config.tls_ca_cert,
            client_cert=config.tls_client_cert,
            client_key=config.tls_client_key,
            no_verify=config.tls_no_verify,
            server_name=config.tls_server_name,
        )

    def run(self) -> ProbeResult:
        config = self.config
        try:
            validate(config)
            host, port = parse_address(config.address)
            headers = compose_headers(config.rpc_headers, config.user_agent)
        except ValidationError as exc:
            self.log.error("invalid arguments: %s", exc)
            return ProbeResult.validation_error(str(exc))

        self._log_options(headers)

        factory = self.channel_factory or create_default_channel_factory(
            user_agent=config.user_agent, gzip=config.gzip
        )
        try:
            security = self._security()
            with open_connection(factory, host, port, security, config.connection_timeout, log=self.log) as channel:
                return check_health(
                    channel,
                    config.service,
                    headers,
                    config.rpc_timeout,
                    gzip=config.gzip,
                    log=self.log,
                )
        except ConnectionFailedError as exc:
            self.log.error("error: %s", exc)
            return ProbeResult.connection_error(str(exc))


def run_probe(config: ProbeConfig, *, channel_factory: ChannelFactory | None = None) -> ProbeResult:
    """Run one probe for ``config``."""
    return HealthProbe(config, channel_factory=channel_factory).run()


__all__ = ["HealthProbe", "run_probe"]
