# tests/test_main.py
import json

import pytest
from structlog.testing import capture_logs

from priming import main as entry
from priming.shared.logging_config import add_open_telemetry_spans, add_service_context
from priming.shared.config import settings
from priming.shared.observability import get_tracer

RESOURCE = {
    "$kind": "Microsoft.AdaptiveDialog",
    "recognizer": {"$kind": "Microsoft.NumberEntityRecognizer"},
    "triggers": [
        {
            "$kind": "Microsoft.OnBeginDialog",
            "actions": [{"$kind": "Microsoft.BeginDialog", "dialog": "ask_color"}],
        }
    ],
}

COLOR_RESOURCE = {"$kind": "Microsoft.ChoiceInput", "choices": ["red", "blue"]}


@pytest.fixture(autouse=True)
def quiet_bootstrap(monkeypatch):
    """Logging and the global tracer provider are process-wide; keep them untouched."""
    monkeypatch.setattr(entry, "configure_logging", lambda: None)
    monkeypatch.setattr(entry, "setup_observability", lambda: None)
    with capture_logs():
        yield


@pytest.fixture
def resources(tmp_path):
    (tmp_path / "main.dialog").write_text(json.dumps(RESOURCE), encoding="utf-8")
    (tmp_path / "ask_color.dialog").write_text(json.dumps(COLOR_RESOURCE), encoding="utf-8")
    return tmp_path


def test_bootstrap_loads_dialog_directory(resources):
    dialogs = entry.bootstrap(str(resources))
    assert "main" in dialogs
    assert "ask_color" in dialogs


def test_describe_command_resolves_references(resources, capsys):
    code = entry.main(["describe", str(resources / "main.dialog"), "--locale", "en-us"])

    assert code == 0
    printed = json.loads(capsys.readouterr().out)
    assert {e["name"] for e in printed["entities"]} == {"number", "ordinal"}
    assert list(printed["vocabulary_lists"]) == ["ask_color"]


def test_describe_command_reports_bad_resource(tmp_path):
    path = tmp_path / "broken.dialog"
    path.write_text(json.dumps({"$kind": "Contoso.Wizard"}), encoding="utf-8")

    assert entry.main(["describe", str(path)]) == 1


def test_no_command_prints_help(capsys):
    assert entry.main([]) == 0
    assert "describe" in capsys.readouterr().out


def test_log_entries_carry_trace_ids():
    event = add_open_telemetry_spans(None, None, {"event": "x"})
    assert event["trace_id"] is None

    with get_tracer(__name__).start_as_current_span("priming.check"):
        event = add_open_telemetry_spans(None, None, {"event": "x"})
    # The default (no-op) provider records nothing, a configured one does.
    assert "span_id" in event


def test_log_entries_carry_service_context():
    event = add_service_context(None, None, {"event": "priming_dialog_begun"})
    assert event["service"] == settings.APP_NAME
    assert event["env"] in {"development", "production", "testing"}

    # Values bound by the caller win.
    assert add_service_context(None, None, {"service": "engine"})["service"] == "engine"
