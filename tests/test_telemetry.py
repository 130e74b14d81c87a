from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from starterpack import __version__
from starterpack.settings import RuntimeSettings
from starterpack.utils import telemetry


@pytest.fixture()
def runtime_settings(tmp_path: Path) -> RuntimeSettings:
    return RuntimeSettings(home_dir=tmp_path, log_dir=tmp_path / "logs", cli_version=__version__)


def test_record_and_summarize(runtime_settings: RuntimeSettings) -> None:
    telemetry.record_event(runtime_settings, "build.complete", {"count": 2}, status="ok", component="build")
    telemetry.record_event(runtime_settings, "build.failed", level="error", status="error")

    events = list(telemetry.iter_events(runtime_settings))

    assert [evt["event"] for evt in events] == ["build.complete", "build.failed"]
    assert events[0]["payload"] == {"count": 2}
    assert telemetry.summarize(events) == {
        "total": 2,
        "by_event": {"build.complete": 1, "build.failed": 1},
        "by_status": {"ok": 1, "error": 1},
    }


def test_disabled_telemetry_writes_nothing(runtime_settings: RuntimeSettings, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STARTERPACK_TELEMETRY", "off")

    telemetry.record_event(runtime_settings, "list", {"count": 1})

    assert not telemetry.telemetry_path(runtime_settings).exists()


def test_invalid_records_rejected(runtime_settings: RuntimeSettings) -> None:
    with pytest.raises(jsonschema.ValidationError):
        telemetry.record_event(runtime_settings, " ")
    with pytest.raises(jsonschema.ValidationError):
        telemetry.record_event(runtime_settings, "x", level="debug")
    with pytest.raises(jsonschema.ValidationError):
        telemetry.record_event(runtime_settings, "x", duration_ms=-1)

    assert not telemetry.telemetry_path(runtime_settings).exists()


def test_schema_rejects_unknown_fields() -> None:
    record = {"ts": 1.0, "event": "x", "payload": {}, "level": "info", "correlation": "abc"}
    with pytest.raises(jsonschema.ValidationError):
        telemetry._telemetry_validator().validate(record)


def test_iter_events_skips_garbage_and_clear(runtime_settings: RuntimeSettings) -> None:
    path = telemetry.telemetry_path(runtime_settings)
    path.parent.mkdir(parents=True)
    path.write_text('not json\n\n{"event": "list", "status": "ok"}\n', encoding="utf-8")

    assert [evt["event"] for evt in telemetry.iter_events(runtime_settings)] == ["list"]

    telemetry.clear(runtime_settings)
    assert list(telemetry.iter_events(runtime_settings)) == []
