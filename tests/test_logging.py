import json

import pytest
import structlog

from changekit import Differ, ShapeMismatchError
from changepack.hooks import LoggingObserver, ObserverSet
from changepack.observability import get_logger, setup_logging


@pytest.fixture(autouse=True)
def _restore_structlog():
    yield
    structlog.reset_defaults()


def _json_lines(err: str) -> list[dict]:
    return [json.loads(line) for line in err.strip().splitlines() if line.strip()]


def test_setup_logging_emits_json_with_component(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging("info")

    get_logger("tests").info("diff.compare.finished", change_count=2)

    payload = _json_lines(capsys.readouterr().err)[-1]
    assert payload["event"] == "diff.compare.finished"
    assert payload["component"] == "tests"
    assert payload["change_count"] == 2
    assert payload["level"] == "info"
    assert "ts" in payload


def test_setup_logging_filters_below_level(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging("warning")

    log = get_logger("tests")
    log.info("hidden")
    log.warning("shown")

    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "shown" in err


def test_logging_observer_writes_one_line_per_comparison(
    capsys: pytest.CaptureFixture[str],
) -> None:
    setup_logging("info")
    differ = Differ(observers=ObserverSet(observers=(LoggingObserver(),)))

    differ.compare({"a": 1, "b": 2}, {"a": 3})

    records = _json_lines(capsys.readouterr().err)
    assert [record["event"] for record in records] == ["diff.compare.finished"]
    assert records[0]["component"] == "diff"
    assert records[0]["change_count"] == 2
    assert records[0]["summary"] == {"create": 0, "update": 1, "delete": 1}


def test_logging_observer_reports_changes_at_debug_and_failures(
    capsys: pytest.CaptureFixture[str],
) -> None:
    setup_logging("debug")
    differ = Differ(observers=ObserverSet(observers=(LoggingObserver(),)))

    differ.compare([1], [1, 2])
    with pytest.raises(ShapeMismatchError):
        differ.compare(1, "1")

    events = [record["event"] for record in _json_lines(capsys.readouterr().err)]
    assert events == [
        "diff.compare.started",
        "diff.change",
        "diff.compare.finished",
        "diff.compare.started",
        "diff.compare.failed",
    ]
