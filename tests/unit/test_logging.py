"""Tests for the JSON log formatter and the latency budgets."""
import json
import logging

import structlog

from app.core.logging import build_formatter
from app.core.middleware import LatencyMonitorMiddleware


def _format(msg, *args, extra=None):
    structlog.contextvars.clear_contextvars()
    name = "app.api.routes.contact"
    record = logging.getLogger(name).makeRecord(
        name, logging.INFO, __file__, 1, msg, args, None, extra=extra
    )
    return json.loads(build_formatter().format(record))


def test_stdlib_extra_fields_reach_output():
    payload = _format(
        "AUDIT: Contact message relayed id=%s",
        "req-1",
        extra={"audit_event": "contact_relayed", "request_id": "req-1"},
    )

    assert payload["event"] == "AUDIT: Contact message relayed id=req-1"
    assert payload["audit_event"] == "contact_relayed"
    assert payload["request_id"] == "req-1"
    assert payload["level"] == "info"
    assert payload["logger"] == "app.api.routes.contact"


def test_stdlib_records_are_redacted():
    payload = _format("Reply to %s", "juan@example.com")

    assert "juan@example.com" not in payload["event"]
    assert "j***@example.com" in payload["event"]


def test_slo_breach_logged_for_health_checks(caplog):
    middleware = LatencyMonitorMiddleware(app=None)
    caplog.set_level("WARNING", logger="formrelay.latency")

    middleware._check_slo("/api/health/ready", 1.0)
    middleware._check_slo("/api/health/live", 1.0)
    middleware._check_slo("/api/contact", 1.0)

    breaches = [
        r.getMessage() for r in caplog.records if "SLO_BREACH" in r.getMessage()
    ]
    assert len(breaches) == 2
    assert "/api/health/ready" in breaches[0]
    assert "/api/health/live" in breaches[1]
