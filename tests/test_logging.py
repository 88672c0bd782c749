import logging


def test_request_id_header_and_propagation(client):
    resp = client.get("/__ok", headers={"X-Request-ID": "my-fixed-id-123"})
    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == "my-fixed-id-123"


def test_request_id_generated_when_missing(client):
    resp = client.get("/__ok")
    assert len(resp.headers["X-Request-ID"]) == 32


def test_logs_include_request_id_attribute(client, caplog):
    from app.logging import RequestIdFilter
    caplog.set_level("INFO")
    caplog.handler.addFilter(RequestIdFilter())
    resp = client.get("/__log", headers={"X-Request-ID": "rid-abc"})
    assert resp.status_code == 200
    assert any(getattr(r, "request_id", "") == "rid-abc" for r in caplog.records)


def test_sensitive_fields_masked_in_info(app, caplog, monkeypatch):
    from app.logging import MaskingFilter
    monkeypatch.setenv("APP_ENV", "testing")
    caplog.set_level("INFO")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test")
    logger.info({"email": "user@example.com", "temporary_password": "Ab1!Ab1!Ab1!", "order_id": 7})
    record = next(r for r in caplog.records if r.name == "mask_test")
    assert record.msg["email"] == "[REDACTED]"
    assert record.msg["temporary_password"] == "[REDACTED]"
    assert record.msg["order_id"] == 7


def test_sensitive_fields_visible_in_debug(app, caplog, monkeypatch):
    from app.logging import MaskingFilter
    monkeypatch.setenv("APP_ENV", "development")
    caplog.set_level("DEBUG")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test_debug")
    logger.debug({"password": "secret"})
    record = next(r for r in caplog.records if r.name == "mask_test_debug")
    assert record.msg["password"] == "secret"


def test_json_formatter_renders_dict_messages():
    import json
    from app.logging import JsonFormatter
    record = logging.LogRecord("orders", logging.INFO, __file__, 1, {"event": "order_created", "order_id": 3}, None, None)
    record.request_id = "rid-1"
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "order_created"
    assert out["request_id"] == "rid-1"
    assert out["level"] == "INFO"
