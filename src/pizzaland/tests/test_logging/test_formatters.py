# src/pizzaland/tests/test_logging/test_formatters.py
import json
import logging

from pizzaland.core.logging.adapters import OperationLogger, get_operation_logger
from pizzaland.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record():
    return logging.LogRecord("pizzaland", logging.INFO, __file__, 10, "hello %s", ("tester",), None)


def test_json_formatter_basic_fields():
    rec = make_record()
    rec.op = "domain.pizzaland.Get"
    rec.request_id = "req-1"

    data = json.loads(JsonFormatter(env="testing", service="svc").format(rec))

    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert "timestamp" in data
    assert data["request_id"] == "req-1"
    assert data["op"] == "domain.pizzaland.Get"
    assert "version" in data


def test_json_formatter_non_serializable_extra():
    rec = make_record()

    class X:
        def __repr__(self):
            return "<X>"

    rec.obj = X()

    data = json.loads(JsonFormatter(env="dev", service="svc").format(rec))

    assert data["obj"] == "<X>"


def test_json_formatter_skips_record_internals():
    data = json.loads(JsonFormatter(env="dev").format(make_record()))

    for internal in ("args", "msg", "levelno", "thread", "processName"):
        assert internal not in data


def test_color_formatter_appends_operation():
    rec = make_record()
    rec.request_id = "-"
    rec.op = "domain.pizzaland.Remove"

    line = ColorFormatter().format(rec)

    assert line.endswith("hello tester [op=domain.pizzaland.Remove]")


def test_operation_logger_merges_call_extra(caplog):
    log = get_operation_logger("pizzaland.test", op="domain.pizzaland.Update")

    with caplog.at_level(logging.INFO, logger="pizzaland.test"):
        log.info("pizza updated", extra={"success": True})

    record = caplog.records[-1]
    assert record.op == "domain.pizzaland.Update"
    assert record.success is True


def test_bind_adds_context_without_touching_parent():
    parent = OperationLogger(logging.getLogger("pizzaland.test"), {"component": "svc"})

    child = parent.bind(op="domain.pizzaland.List")

    assert child.extra == {"component": "svc", "op": "domain.pizzaland.List"}
    assert parent.extra == {"component": "svc"}
