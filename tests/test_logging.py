import json
import logging

from fastapi.testclient import TestClient

from currency_service.core.config import Settings
from currency_service.core.logging import REQUEST_ID_HEADER, init_logging, request_ctx
from currency_service.main import create_app


def log_lines(capsys):
    return [json.loads(line) for line in capsys.readouterr().out.splitlines() if line]


def test_records_carry_request_context(capsys):
    init_logging(debug=False)
    token = request_ctx.set({"request_id": "rid-1", "route": "POST /api/currency/exchange"})
    try:
        logging.getLogger("app.test").info("converted", extra={"status": 200})
    finally:
        request_ctx.reset(token)
    logging.getLogger("app.test").info("outside")

    inside, outside = log_lines(capsys)[-2:]
    assert inside["message"] == "converted"
    assert inside["request_id"] == "rid-1"
    assert inside["route"] == "POST /api/currency/exchange"
    assert inside["status"] == 200
    assert outside["request_id"] == "-"
    assert "status" not in outside


def test_debug_mode_logs_served_requests(capsys):
    app = create_app(settings_override=Settings(_env_file=None, debug=True))
    with TestClient(app) as client:
        resp = client.get("/api/info", headers={REQUEST_ID_HEADER: "dbg-7"})
    served = [r for r in log_lines(capsys) if r["message"] == "request served"]
    assert served
    assert served[-1]["request_id"] == "dbg-7"
    assert served[-1]["route"] == "GET /api/info"
    assert served[-1]["status"] == resp.status_code == 200
    assert served[-1]["duration_ms"] >= 0


def test_unhandled_error_is_logged_with_request_id(capsys):
    app = create_app(settings_override=Settings(_env_file=None))

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaput")

    with TestClient(app, raise_server_exceptions=False) as client:
        resp = client.get("/boom", headers={REQUEST_ID_HEADER: "err-9"})

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "internal_error"
    assert body["request_id"] == "err-9"

    errors = [r for r in log_lines(capsys) if r["message"] == "unhandled exception"]
    assert errors
    assert errors[-1]["request_id"] == "err-9"
    assert errors[-1]["route"] == "GET /boom"
    assert errors[-1]["status"] == 500
    assert "RuntimeError: kaput" in errors[-1]["exc_info"]


def test_rejected_body_is_logged(capsys):
    app = create_app(settings_override=Settings(_env_file=None))
    with TestClient(app) as client:
        client.post("/api/currency/exchange", json={"from": "EUR"})
    rejected = [r for r in log_lines(capsys) if r["message"] == "rejected request body"]
    assert rejected
    assert rejected[-1]["status"] == 400
    assert rejected[-1]["error_count"] == 2
    assert rejected[-1]["route"] == "POST /api/currency/exchange"
