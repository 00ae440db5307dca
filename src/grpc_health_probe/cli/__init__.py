# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Command-line entrypoint."""

from . import main
from .main import build_parser

__all__ = ["build_parser", "main"]
