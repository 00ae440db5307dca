# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""TLS credential assembly.

PEM files named on the command line are loaded and checked here, once per run, into an
immutable TLSDescriptor. The descriptor is turned into grpc channel credentials only when
the channel is dialed.
"""

from __future__ import annotations

import datetime
import logging
import socket
import ssl

import grpc
from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.x509.oid import NameOID

from .errors import ConnectionFailedError
from .models.tls import TLSDescriptor, VerificationMode

logger = logging.getLogger(__name__)

ChannelOptions = list[tuple[str, object]]


def _read_file(path: str, what: str) -> bytes:
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise ConnectionFailedError(f"failed to read {what} {path!r}: {exc}") from exc


def _load_certificates(path: str, what: str) -> bytes:
    data = _read_file(path, what)
    try:
        certificates = x509.load_pem_x509_certificates(data)
    except ValueError as exc:
        raise ConnectionFailedError(f"failed to parse {what} {path!r} as PEM: {exc}") from exc
    if not certificates:
        raise ConnectionFailedError(f"no certificate found in {what} {path!r}")
    return data


def _load_private_key(path: str) -> bytes:
    data = _read_file(path, "client key")
    try:
        serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError) as exc:
        # TypeError covers encrypted keys, which cannot be used without a passphrase.
        raise ConnectionFailedError(f"failed to parse client key {path!r} as PEM: {exc}") from exc
    except UnsupportedAlgorithm as exc:
        raise ConnectionFailedError(f"unsupported client key {path!r}: {exc}") from exc
    return data


def build_tls_descriptor(
    *,
    ca_cert: str | None = None,
    client_cert: str | None = None,
    client_key: str | None = None,
    no_verify: bool = False,
    server_name: str | None = None,
) -> TLSDescriptor:
    """Load the referenced PEM files into a TLSDescriptor."""
    certificate_chain: bytes | None = None
    private_key: bytes | None = None
    if client_cert is not None and client_key is not None:
        certificate_chain = _load_certificates(client_cert, "client certificate")
        private_key = _load_private_key(client_key)

    trust_roots: bytes | None = None
    if ca_cert is not None:
        trust_roots = _load_certificates(ca_cert, "CA certificate")

    return TLSDescriptor(
        certificate_chain=certificate_chain,
        private_key=private_key,
        trust_roots=trust_roots,
        verification=VerificationMode.NONE if no_verify else VerificationMode.FULL,
        hostname_override=server_name,
    )


def fetch_server_certificate(host: str, port: int, timeout: float) -> bytes:
    """Return the DER certificate the server presents, without verifying it."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    context.set_alpn_protocols(["h2"])
    bare_host = host.strip("[]")
    try:
        with socket.create_connection((bare_host, port), timeout=timeout) as sock:
            with context.wrap_socket(sock, server_hostname=bare_host) as tls_sock:
                der = tls_sock.getpeercert(binary_form=True)
    except OSError as exc:
        raise ConnectionFailedError(f"failed to fetch server certificate from {host}:{port}: {exc}") from exc
    if not der:
        raise ConnectionFailedError(f"server at {host}:{port} presented no certificate")
    return der


def certificate_host_name(certificate: x509.Certificate) -> str | None:
    """Pick a name the certificate is valid for: first SAN entry, then subject CN."""
    try:
        san = certificate.extensions.get_extension_for_class(x509.SubjectAlternativeName).value
    except x509.ExtensionNotFound:
        san = None
    if san is not None:
        dns_names = san.get_values_for_type(x509.DNSName)
        if dns_names:
            name = dns_names[0]
            return "probe." + name[2:] if name.startswith("*.") else name
        addresses = san.get_values_for_type(x509.IPAddress)
        if addresses:
            return str(addresses[0])
    common_names = certificate.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
    if common_names:
        return str(common_names[0].value)
    return None


def check_pinnable(certificate: x509.Certificate, host: str, port: int) -> None:
    """
    Reject a fetched certificate that grpc would refuse even when pinned as the only root.

    BoringSSL still checks validity dates and builds a chain to the pinned root, so only a
    currently valid self-signed certificate can stand in for unverified TLS.
    """
    now = datetime.datetime.now(datetime.timezone.utc)
    if certificate.not_valid_after_utc < now:
        raise ConnectionFailedError(
            f"server certificate at {host}:{port} expired on {certificate.not_valid_after_utc:%Y-%m-%d %H:%M:%S}Z; "
            "--tls-no-verify cannot accept expired certificates"
        )
    if certificate.not_valid_before_utc > now:
        raise ConnectionFailedError(
            f"server certificate at {host}:{port} is not valid before "
            f"{certificate.not_valid_before_utc:%Y-%m-%d %H:%M:%S}Z; "
            "--tls-no-verify cannot accept certificates that are not yet valid"
        )
    if certificate.issuer != certificate.subject:
        raise ConnectionFailedError(
            f"server certificate at {host}:{port} is issued by {certificate.issuer.rfc4514_string()}; "
            "--tls-no-verify only accepts self-signed certificates, use --tls-ca-cert instead"
        )


def channel_credentials(
    descriptor: TLSDescriptor, host: str, port: int, timeout: float
) -> tuple[grpc.ChannelCredentials, ChannelOptions]:
    """
    Translate a descriptor into grpc credentials and channel options.

    grpcio cannot switch certificate verification off. With VerificationMode.NONE the
    certificate the server presents is fetched first and pinned as the only trust root,
    and the target name is overridden with a name taken from that certificate.
    """
    options: ChannelOptions = []
    trust_roots = descriptor.trust_roots
    hostname_override = descriptor.hostname_override

    if not descriptor.verifies_peer:
        der = fetch_server_certificate(host, port, timeout)
        try:
            certificate = x509.load_der_x509_certificate(der)
        except ValueError as exc:
            raise ConnectionFailedError(f"unreadable server certificate from {host}:{port}: {exc}") from exc
        check_pinnable(certificate, host, port)
        trust_roots = ssl.DER_cert_to_PEM_cert(der).encode("ascii")
        hostname_override = certificate_host_name(certificate)
        logger.debug("pinned unverified server certificate (name %s)", hostname_override)

    if hostname_override:
        options.append(("grpc.ssl_target_name_override", hostname_override))

    credentials = grpc.ssl_channel_credentials(
        root_certificates=trust_roots,
        private_key=descriptor.private_key,
        certificate_chain=descriptor.certificate_chain,
    )
    return credentials, options


__all__ = [
    "build_tls_descriptor",
    "certificate_host_name",
    "check_pinnable",
    "channel_credentials",
    "fetch_server_certificate",
]
