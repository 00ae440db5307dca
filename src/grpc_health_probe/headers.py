# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""RPC header parsing.

Headers arrive as free-form ``"name: value"`` strings and leave as ordered gRPC metadata
pairs. gRPC metadata keys must be lowercase ASCII, so names are lowercased here.
"""

from __future__ import annotations

from collections.abc import Iterable

from .errors import ValidationError
from .transport.models import HeaderSet

USER_AGENT_HEADER = "user-agent"


def split_header(raw: str) -> tuple[str, str] | None:
    """Split ``"name: value"`` into its two parts, or None when it is not exactly two."""
    parts = [part for part in str(raw).split(":") if part]
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def compose_headers(raw_headers: Iterable[str], user_agent: str) -> HeaderSet:
    """Build the metadata for the Check call, ending with the configured user-agent."""
    pairs: list[tuple[str, str]] = []
    for raw in raw_headers:
        split = split_header(raw)
        if split is None:
            raise ValidationError(f"invalid RPC header, expected 'key: value', got {raw}")
        name, value = split
        pairs.append((name.strip().lower(), value.strip()))
    pairs.append((USER_AGENT_HEADER, user_agent))
    return tuple(pairs)


def format_headers(headers: HeaderSet) -> str:
    return "[" + ", ".join(f"'{name}': '{value}'" for name, value in headers) + "]"


__all__ = ["USER_AGENT_HEADER", "compose_headers", "format_headers", "split_header"]
