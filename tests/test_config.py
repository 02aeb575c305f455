from __future__ import annotations

import pytest

from line_input.buffer import EditMode
from line_input.runtime import telemetry
from line_input.runtime.config import EngineConfig


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("START_MODE", "TAB_INSERTS", "BLUR_KEYS", "DISPATCH_LOGGER"):
        monkeypatch.delenv(f"LINE_INPUT_{name}", raising=False)

    config = EngineConfig.from_env()

    assert config == EngineConfig()
    assert config.start_mode is EditMode.INSERT
    assert config.tab_inserts
    assert config.blur_keys_enabled


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINE_INPUT_START_MODE", " Overwrite ")
    monkeypatch.setenv("LINE_INPUT_TAB_INSERTS", "no")
    monkeypatch.setenv("LINE_INPUT_BLUR_KEYS", "false")
    monkeypatch.setenv("LINE_INPUT_DISPATCH_LOGGER", "host.input")

    config = EngineConfig.from_env()

    assert config.start_mode is EditMode.OVERWRITE
    assert not config.tab_inserts
    assert not config.blur_keys_enabled
    assert config.logger_name == "host.input"


def test_invalid_start_mode_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINE_INPUT_START_MODE", "replace")

    with pytest.raises(ValueError, match="LINE_INPUT_START_MODE"):
        EngineConfig.from_env()


def test_env_flag_parsing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINE_INPUT_SOME_FLAG", "YES")
    assert telemetry.env_flag("SOME_FLAG", False)

    monkeypatch.setenv("LINE_INPUT_SOME_FLAG", "0")
    assert not telemetry.env_flag("SOME_FLAG", True)

    monkeypatch.delenv("LINE_INPUT_SOME_FLAG")
    assert telemetry.env_flag("SOME_FLAG", True)


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError, match="Unknown preset"):
        telemetry.configure(preset="verbose")


def test_configure_preset_resets_logger_cache() -> None:
    first = telemetry.get_logger("line_input.tests")
    assert telemetry.get_logger("line_input.tests") is first

    telemetry.configure(preset="quiet")
    try:
        assert telemetry.get_logger("line_input.tests") is not first
    finally:
        telemetry.configure()


def test_span_reraises_and_records_failure() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("tests::span", component=True, metadata={"k": 1}) as handle:
            handle.add_metadata("extra", (1, 2))
            raise RuntimeError("boom")

    assert handle.metadata == {"k": "1", "extra": "(1, 2)"}
    assert handle.component_name == "tests::span"


def test_record_event_accepts_levels() -> None:
    telemetry.record_event("tests.event", level="debug", data={"value": 1})

    with pytest.raises(ValueError):
        telemetry.record_event("tests.event", level="loud")
