# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Process exit codes."""

from enum import IntEnum

from .models.probe import ProbeOutcome, ProbeResult


class ExitStatus(IntEnum):
    SERVING = 0
    # Invalid arguments were specified.
    INVALID_ARGUMENTS = 1
    # The connection could not be established.
    CONNECTION_FAILURE = 2
    # The health rpc failed.
    RPC_FAILURE = 3
    # The rpc succeeded but the service is not serving.
    UNHEALTHY = 4


_EXIT_STATUS_BY_OUTCOME: dict[ProbeOutcome, ExitStatus] = {
    ProbeOutcome.SERVING: ExitStatus.SERVING,
    ProbeOutcome.VALIDATION_ERROR: ExitStatus.INVALID_ARGUMENTS,
    ProbeOutcome.CONNECTION_ERROR: ExitStatus.CONNECTION_FAILURE,
    ProbeOutcome.RPC_ERROR: ExitStatus.RPC_FAILURE,
    ProbeOutcome.UNHEALTHY: ExitStatus.UNHEALTHY,
}


def exit_code_for(result: ProbeResult) -> ExitStatus:
    return _EXIT_STATUS_BY_OUTCOME[result.outcome]


__all__ = ["ExitStatus", "exit_code_for"]
