import io
import json
import sys
from pathlib import Path
from urllib.error import HTTPError, URLError

import pytest

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app.clients import intake_api
from app.clients.intake_api import IntakeApiClient, IntakeApiError


class _DummyResponse:
    def __init__(self, payload, status: int = 200):
        self.status = status
        self._body = json.dumps(payload).encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *_exc):
        return False


def _http_error(url: str, code: int, payload) -> HTTPError:
    body = io.BytesIO(json.dumps(payload).encode("utf-8"))
    return HTTPError(url, code, "error", {}, body)


def test_submit_posts_json_document(monkeypatch):
    captured = {}

    def _fake_urlopen(request, timeout):
        captured["url"] = request.full_url
        captured["method"] = request.get_method()
        captured["body"] = json.loads(request.data.decode("utf-8"))
        return _DummyResponse({"message": "ok"})

    monkeypatch.setattr(intake_api, "urlopen", _fake_urlopen)
    client = IntakeApiClient("http://intake.local/")

    assert client.submit({"yeshivaName": "A"}) == "ok"
    assert captured == {
        "url": "http://intake.local/api/submit",
        "method": "POST",
        "body": {"yeshivaName": "A"},
    }


def test_submit_failure_surfaces_server_error(monkeypatch):
    def _fake_urlopen(request, timeout):
        raise _http_error(request.full_url, 500, {"error": "store down"})

    monkeypatch.setattr(intake_api, "urlopen", _fake_urlopen)
    with pytest.raises(IntakeApiError) as excinfo:
        IntakeApiClient("http://intake.local").submit({})
    assert excinfo.value.status_code == 500
    assert str(excinfo.value) == "store down"


def test_unreachable_server_raises_without_retry(monkeypatch):
    calls = []

    def _fake_urlopen(request, timeout):
        calls.append(request.full_url)
        raise URLError("connection refused")

    monkeypatch.setattr(intake_api, "urlopen", _fake_urlopen)
    with pytest.raises(IntakeApiError):
        IntakeApiClient("http://intake.local").list_all()
    assert len(calls) == 1


def test_list_all_returns_documents(monkeypatch):
    monkeypatch.setattr(
        intake_api,
        "urlopen",
        lambda request, timeout: _DummyResponse([{"yeshivaName": "B"}, {"yeshivaName": "A"}]),
    )
    forms = IntakeApiClient("http://intake.local").list_all()
    assert [item["yeshivaName"] for item in forms] == ["B", "A"]


def test_check_admin_code_maps_401_to_false(monkeypatch):
    def _fake_urlopen(request, timeout):
        body = json.loads(request.data.decode("utf-8"))
        if body["code"] == "right":
            return _DummyResponse({"success": True})
        raise _http_error(request.full_url, 401, {"success": False, "message": "no"})

    monkeypatch.setattr(intake_api, "urlopen", _fake_urlopen)
    client = IntakeApiClient("http://intake.local")
    assert client.check_admin_code("right") is True
    assert client.check_admin_code("wrong") is False


def test_submit_tolerates_non_object_success_body(monkeypatch):
    monkeypatch.setattr(intake_api, "urlopen", lambda request, timeout: _DummyResponse(["saved"]))
    assert IntakeApiClient("http://intake.local").submit({"yeshivaName": "A"}) == ""
