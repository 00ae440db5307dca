# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport security models."""

from dataclasses import dataclass
from enum import Enum


class VerificationMode(str, Enum):
    FULL = "FULL"
    NONE = "NONE"


@dataclass(frozen=True)
class TLSDescriptor:
    """
    PEM material and verification policy for one TLS channel.

    ``trust_roots`` of None means the system default trust store.
    """

    certificate_chain: bytes | None = None
    private_key: bytes | None = None
    trust_roots: bytes | None = None
    verification: VerificationMode = VerificationMode.FULL
    hostname_override: str | None = None

    @property
    def verifies_peer(self) -> bool:
        return self.verification is VerificationMode.FULL
