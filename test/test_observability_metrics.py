from conftest import FakeProvider


def test_metrics_endpoint_exposes_prometheus_text(app_env) -> None:
    r = app_env["client"].get("/metrics")
    assert r.status_code == 200
    assert "text/plain" in r.headers.get("content-type", "")
    body = r.text
    assert "taskmind_llm_requests_total" in body
    assert "taskmind_tasks_stored" in body


def test_generate_increments_request_counter(app_env, auth_headers) -> None:
    client = app_env["client"]
    app_env["provider"] = FakeProvider('[{"title": "A"}]')
    assert client.post("/api/ai/generate", json={"context": "a"}, headers=auth_headers).status_code == 200

    body = client.get("/metrics").text
    found = any(
        line.startswith('taskmind_requests_total{endpoint="/api/ai/generate",status="ok"}')
        for line in body.splitlines()
    )
    assert found, "Expected taskmind_requests_total sample line for /api/ai/generate"
    assert 'taskmind_llm_requests_total{provider="fake",status="ok"}' in body


def test_tasks_gauge_matches_store(app_env, auth_headers) -> None:
    client = app_env["client"]
    client.post("/api/tasks", json={"title": "A"}, headers=auth_headers)
    client.post("/api/tasks", json={"title": "B"}, headers=auth_headers)

    depth = None
    for line in client.get("/metrics").text.splitlines():
        if line.startswith("taskmind_tasks_stored "):
            depth = line.split(" ", 1)[1].strip()
            break
    assert depth is not None
    assert int(float(depth)) == 2


def test_health(app_env) -> None:
    r = app_env["client"].get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"
