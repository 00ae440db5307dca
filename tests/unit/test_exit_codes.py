# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import grpc

from grpc_health_probe.errors import RpcErrorCategory
from grpc_health_probe.exit_codes import ExitStatus, exit_code_for
from grpc_health_probe.models import HealthStatus, ProbeOutcome, ProbeResult


def test_exit_codes_cover_every_outcome():
    results = {
        ProbeResult.serving(): 0,
        ProbeResult.validation_error("bad"): 1,
        ProbeResult.connection_error("refused"): 2,
        ProbeResult.rpc_error(grpc.StatusCode.UNAVAILABLE, "down"): 3,
        ProbeResult.rpc_error(grpc.StatusCode.UNIMPLEMENTED, "no", RpcErrorCategory.UNIMPLEMENTED): 3,
        ProbeResult.rpc_error(grpc.StatusCode.DEADLINE_EXCEEDED, "slow", RpcErrorCategory.DEADLINE_EXCEEDED): 3,
        ProbeResult.unhealthy(HealthStatus.NOT_SERVING): 4,
        ProbeResult.unhealthy(HealthStatus.UNKNOWN): 4,
        ProbeResult.unhealthy(HealthStatus.SERVICE_UNKNOWN): 4,
    }
    for result, expected in results.items():
        assert exit_code_for(result) == expected

    assert {exit_code_for(ProbeResult(outcome)) for outcome in ProbeOutcome} == set(ExitStatus)
    assert sorted(int(status) for status in ExitStatus) == [0, 1, 2, 3, 4]


def test_unhealthy_result_carries_status():
    result = ProbeResult.unhealthy(HealthStatus.NOT_SERVING)
    assert result.status is HealthStatus.NOT_SERVING
    assert "NOT_SERVING" in result.message


def test_health_status_from_wire_falls_back_to_unknown():
    assert HealthStatus.from_wire(1) is HealthStatus.SERVING
    assert HealthStatus.from_wire(42) is HealthStatus.UNKNOWN
