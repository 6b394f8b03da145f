"""Small HTTP client for the intake service's JSON API."""

import json
import logging
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 20


class IntakeApiError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class IntakeApiClient:
    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, body: Any = None) -> tuple[int, Any]:
        data = None
        headers = {"Accept": "application/json"}
        if body is not None:
            data = json.dumps(body, ensure_ascii=False).encode("utf-8")
            headers["Content-Type"] = "application/json"

        request = Request(f"{self.base_url}{path}", data=data, headers=headers, method=method)
        try:
            with urlopen(request, timeout=self.timeout) as response:  # noqa: S310
                return response.status, _decode(response.read())
        except HTTPError as exc:
            return exc.code, _decode(exc.read())
        except (URLError, OSError) as exc:
            logger.error("Intake API %s %s unreachable: %s", method, path, exc)
            raise IntakeApiError(f"Intake API unreachable: {exc}") from exc

    def submit(self, document: dict[str, Any]) -> str:
        status, payload = self._request("POST", "/api/submit", document)
        if status != 200:
            raise IntakeApiError(_error_text(payload, "Submit failed"), status, payload)
        if not isinstance(payload, dict):
            return ""
        return str(payload.get("message") or "")

    def list_all(self) -> list[dict[str, Any]]:
        status, payload = self._request("GET", "/api/all-forms")
        if status != 200 or not isinstance(payload, list):
            raise IntakeApiError(_error_text(payload, "Fetch failed"), status, payload)
        return payload

    def check_admin_code(self, code: str) -> bool:
        status, payload = self._request("POST", "/api/admin-login", {"code": code})
        if status == 401:
            return False
        if status != 200:
            raise IntakeApiError(_error_text(payload, "Admin check failed"), status, payload)
        return bool(isinstance(payload, dict) and payload.get("success"))


def _decode(raw: bytes) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None


def _error_text(payload: Any, fallback: str) -> str:
    if isinstance(payload, dict):
        for key in ("error", "message", "detail"):
            value = payload.get(key)
            if value:
                return str(value)
    return fallback
