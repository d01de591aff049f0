"""
Tests for configure_structlog.

Verify that application-side structlog loggers and the library's stdlib
"switchyard" logger both honour the configured level and format.
"""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from switchyard import AsyncResult, SwitchyardSettings, configure_structlog


@pytest.mark.usefixtures("clean_env", "restore_logging")
class TestConfigureStructlog:
    def test_filters_below_configured_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        """
        GIVEN log_level="WARNING"
        WHEN an info and a warning event are logged
        THEN only the warning is rendered.
        """
        configure_structlog(SwitchyardSettings(log_level="WARNING"))
        log = structlog.get_logger()
        log.info("hidden.event")
        log.warning("shown.event")
        out = capsys.readouterr().out
        assert "shown.event" in out
        assert "hidden.event" not in out

    def test_defaults_come_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("SWITCHYARD_LOG_LEVEL", "ERROR")
        configure_structlog()
        log = structlog.get_logger()
        log.warning("hidden.event")
        log.error("shown.event")
        out = capsys.readouterr().out
        assert "shown.event" in out
        assert "hidden.event" not in out

    @pytest.mark.asyncio
    async def test_driver_events_rendered_as_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        """
        GIVEN log_format="json" and log_level="DEBUG"
        WHEN an AsyncResult body raises
        THEN the driver's host-failure event is written as a JSON line.
        """
        configure_structlog(SwitchyardSettings(log_level="DEBUG", log_format="json"))

        def body(h):
            raise RuntimeError("kaput")

        await AsyncResult(body).run()

        lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
        events = [json.loads(line) for line in lines]
        host_failures = [e for e in events if "async_result.host_failure" in e["event"]]
        assert host_failures
        assert host_failures[0]["level"] == "debug"
        assert "RuntimeError" in host_failures[0]["event"]

    @pytest.mark.asyncio
    async def test_driver_events_suppressed_at_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_structlog(SwitchyardSettings(log_level="INFO", log_format="json"))
        await AsyncResult(lambda h: h.throw_e("quiet")).run()
        assert "short_circuit" not in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_driver_events_not_duplicated_through_root(self, capsys: pytest.CaptureFixture[str]) -> None:
        """
        GIVEN configure_structlog() attached its own handler to the "switchyard" logger
        WHEN the driver logs a short-circuit
        THEN the record does not propagate to root handlers and is rendered exactly once.
        """
        configure_structlog(SwitchyardSettings(log_level="DEBUG", log_format="json"))
        assert logging.getLogger("switchyard").propagate is False

        await AsyncResult(lambda h: h.throw_e("once")).run()

        lines = [line for line in capsys.readouterr().err.splitlines() if "short_circuit" in line]
        assert len(lines) == 1
