def test_traceparent_header(client):
    resp = client.get("/__ok")
    assert resp.status_code == 200
    assert "traceparent" in resp.headers


def test_trace_and_request_headers_are_exposed(client):
    resp = client.get("/__ok")
    exposed = resp.headers["Access-Control-Expose-Headers"].split(",")
    assert "X-Request-ID" in exposed
    assert "traceparent" in exposed
    assert resp.headers["X-Frame-Options"] == "DENY"
