# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import datetime
import ipaddress
import socket
from concurrent import futures
from dataclasses import dataclass
from pathlib import Path

import grpc
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID
from grpc_health.v1 import health, health_pb2_grpc


@dataclass
class TlsMaterial:
    cert_path: Path
    key_path: Path
    cert_pem: bytes
    key_pem: bytes


def _self_signed(
    name: str,
    *,
    valid_from: datetime.timedelta = datetime.timedelta(days=-1),
    valid_until: datetime.timedelta = datetime.timedelta(days=1),
    issuer: str | None = None,
) -> tuple[bytes, bytes]:
    """Certificate and key for ``name``, validity relative to now; ``issuer`` names a different signer."""
    key = ec.generate_private_key(ec.SECP256R1())
    subject = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, name)])
    issuer_name = subject if issuer is None else x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, issuer)])
    now = datetime.datetime.now(datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer_name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now + valid_from)
        .not_valid_after(now + valid_until)
        .add_extension(
            x509.SubjectAlternativeName([x509.DNSName(name), x509.IPAddress(ipaddress.ip_address("127.0.0.1"))]),
            critical=False,
        )
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .sign(key, hashes.SHA256())
    )
    cert_pem = cert.public_bytes(serialization.Encoding.PEM)
    key_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    return cert_pem, key_pem


def write_tls_material(directory: Path, cert_pem: bytes, key_pem: bytes) -> TlsMaterial:
    cert_path = directory / "server.pem"
    key_path = directory / "server.key"
    cert_path.write_bytes(cert_pem)
    key_path.write_bytes(key_pem)
    return TlsMaterial(cert_path=cert_path, key_path=key_path, cert_pem=cert_pem, key_pem=key_pem)


@pytest.fixture
def expired_tls_material(tmp_path) -> TlsMaterial:
    """Self-signed localhost certificate that expired an hour ago."""
    cert_pem, key_pem = _self_signed(
        "localhost", valid_from=datetime.timedelta(days=-2), valid_until=datetime.timedelta(hours=-1)
    )
    return write_tls_material(tmp_path, cert_pem, key_pem)


@pytest.fixture
def tls_material(tmp_path) -> TlsMaterial:
    cert_pem, key_pem = _self_signed("localhost")
    return write_tls_material(tmp_path, cert_pem, key_pem)


@pytest.fixture
def free_port() -> int:
    """A local port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def grpc_server():
    """
    Start in-process grpc servers on 127.0.0.1.

    Call with ``servicer=None`` for a server that does not register the Health service.
    Extra generic ``handlers`` and a default response ``compression`` can be supplied.
    """
    servers: list[grpc.Server] = []

    def start(servicer=None, tls: TlsMaterial | None = None, *, handlers=(), compression=None) -> int:
        server = grpc.server(
            futures.ThreadPoolExecutor(max_workers=4), handlers=list(handlers), compression=compression
        )
        if servicer is not None:
            health_pb2_grpc.add_HealthServicer_to_server(servicer, server)
        if tls is None:
            port = server.add_insecure_port("127.0.0.1:0")
        else:
            credentials = grpc.ssl_server_credentials([(tls.key_pem, tls.cert_pem)])
            port = server.add_secure_port("127.0.0.1:0", credentials)
        server.start()
        servers.append(server)
        return port

    yield start

    for server in servers:
        server.stop(None)


@pytest.fixture
def health_servicer():
    return health.HealthServicer()


@pytest.fixture
def make_certificate():
    return _self_signed
