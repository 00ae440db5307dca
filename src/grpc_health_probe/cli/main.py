# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""grpc-health-probe CLI."""

from __future__ import annotations

import argparse
import sys

from ..config import ProbeSettings, load_probe_settings
from ..errors import ValidationError
from ..exit_codes import ExitStatus, exit_code_for
from ..log import setup_logging
from ..models.probe import ProbeConfig
from ..runtime import HealthProbe
from ..version import __version__


class ProbeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors as invalid arguments instead of exiting 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        raise ValidationError(message)


def build_parser(settings: ProbeSettings | None = None) -> argparse.ArgumentParser:
    settings = settings or ProbeSettings()
    parser = ProbeArgumentParser(
        prog="grpc-health-probe",
        description="Check the status of a gRPC service using the grpc.health.v1.Health protocol",
    )
    parser.add_argument("address", help="tcp host:port to connect")
    parser.add_argument("--service", default="", help="service name to check (default: whole server)")
    parser.add_argument(
        "--user-agent",
        default=settings.user_agent,
        help="user-agent header value of health check requests (default: %(default)s)",
    )
    parser.add_argument(
        "--connection-timeout",
        type=float,
        default=settings.connection_timeout,
        help="timeout for establishing connection in seconds (default: %(default)s)",
    )
    parser.add_argument(
        "--rpc-header",
        "--rpc-headers",
        dest="rpc_headers",
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="additional RPC header, repeatable",
    )
    parser.add_argument(
        "--rpc-timeout",
        type=float,
        default=settings.rpc_timeout,
        help="timeout for health check rpc in seconds (default: %(default)s)",
    )
    parser.add_argument("--tls", action="store_true", help="use TLS (default: false, INSECURE plaintext transport)")
    parser.add_argument(
        "--tls-no-verify",
        action="store_true",
        help="(with --tls) don't verify the certificate (INSECURE) presented by the server",
    )
    parser.add_argument(
        "--tls-ca-cert",
        help="(with --tls, optional) file containing trusted certificates for verifying server",
    )
    parser.add_argument(
        "--tls-client-cert",
        help="(with --tls, optional) client certificate for authenticating to the server (requires --tls-client-key)",
    )
    parser.add_argument(
        "--tls-client-key",
        help="(with --tls) client private key for authenticating to the server (requires --tls-client-cert)",
    )
    parser.add_argument(
        "--tls-server-name",
        help="(with --tls) override the hostname used to verify the server certificate",
    )
    parser.add_argument(
        "--gzip",
        action="store_true",
        help="use gzip compression for requests and accept gzip-compressed responses",
    )
    parser.add_argument("--verbose", action="store_true", help="verbose logs")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> ProbeConfig:
    return ProbeConfig(
        address=args.address,
        service=args.service,
        user_agent=args.user_agent,
        rpc_headers=tuple(args.rpc_headers),
        connection_timeout=args.connection_timeout,
        rpc_timeout=args.rpc_timeout,
        tls=args.tls,
        tls_no_verify=args.tls_no_verify,
        tls_ca_cert=args.tls_ca_cert,
        tls_client_cert=args.tls_client_cert,
        tls_client_key=args.tls_client_key,
        tls_server_name=args.tls_server_name,
        gzip=args.gzip,
        verbose=args.verbose,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser(load_probe_settings())
    try:
        args = parser.parse_args(argv)
    except ValidationError as exc:
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        return int(ExitStatus.INVALID_ARGUMENTS)

    setup_logging(verbose=args.verbose)
    result = HealthProbe(config_from_args(args)).run()
    return int(exit_code_for(result))


if __name__ == "__main__":
    raise SystemExit(main())
