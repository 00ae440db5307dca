# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging

from grpc_health_probe import config
from grpc_health_probe.config import DEFAULT_USER_AGENT
from grpc_health_probe.log import setup_logging


def test_probe_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("GRPC_HEALTH_PROBE_USER_AGENT", "kube-probe/1.30")
    monkeypatch.setenv("GRPC_HEALTH_PROBE_CONNECTION_TIMEOUT", "2.5")
    monkeypatch.setenv("GRPC_HEALTH_PROBE_RPC_TIMEOUT", "4")

    settings = config.load_probe_settings()

    assert settings.user_agent == "kube-probe/1.30"
    assert settings.connection_timeout == 2.5
    assert settings.rpc_timeout == 4.0


def test_probe_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("GRPC_HEALTH_PROBE_USER_AGENT", "  ")
    monkeypatch.setenv("GRPC_HEALTH_PROBE_CONNECTION_TIMEOUT", "soon")
    monkeypatch.setenv("GRPC_HEALTH_PROBE_RPC_TIMEOUT", "-3")

    settings = config.load_probe_settings()

    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.connection_timeout == config.ProbeSettings.connection_timeout
    assert settings.rpc_timeout == config.ProbeSettings.rpc_timeout


def test_load_probe_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("GRPC_HEALTH_PROBE_RPC_TIMEOUT", "7.5")
    assert config.load_probe_settings().rpc_timeout == 7.5
    monkeypatch.setenv("GRPC_HEALTH_PROBE_RPC_TIMEOUT", "8.5")
    assert config.load_probe_settings().rpc_timeout == 8.5


def test_setup_logging_levels():
    setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING
    setup_logging("warning", verbose=True)
    assert logging.getLogger().level == logging.DEBUG
    setup_logging("not-a-level")
    assert logging.getLogger().level == logging.INFO
