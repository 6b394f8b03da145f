import hmac
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from ...clients.intake_api import IntakeApiClient
from .submission_store import SubmissionStore
from .wizard import WizardController

logger = logging.getLogger(__name__)

REJECTED_NOTICE = "קוד גישה שגוי."


class AdminAccessError(PermissionError):
    """Raised when admin-only data is requested without logging in."""


class CodeVerifier(Protocol):
    def verify(self, code: str) -> bool: ...


class LocalCodeVerifier:
    """Compares against a secret embedded in the client."""

    def __init__(self, secret: str):
        self._secret = secret

    def verify(self, code: str) -> bool:
        return hmac.compare_digest(code.encode("utf-8"), self._secret.encode("utf-8"))


class ServerCodeVerifier:
    """Asks the server's admin-login endpoint."""

    def __init__(self, api: IntakeApiClient):
        self._api = api

    def verify(self, code: str) -> bool:
        return self._api.check_admin_code(code)


@dataclass(frozen=True)
class LoginResult:
    success: bool
    notice: str | None = None


class AdminGate:
    def __init__(
        self,
        verifier: CodeVerifier,
        wizard: WizardController,
        store: SubmissionStore,
        api: IntakeApiClient | None = None,
    ):
        self._verifier = verifier
        self._wizard = wizard
        self._store = store
        self._api = api
        self.username = ""
        self.code = ""
        self.is_logged_in = False

    def login(self, code: str | None = None) -> LoginResult:
        if code is not None:
            self.code = code
        if not self._verifier.verify(self.code):
            logger.info("Admin code rejected")
            return LoginResult(success=False, notice=REJECTED_NOTICE)

        self.is_logged_in = True
        self._wizard.open_admin()
        return LoginResult(success=True)

    def logout(self) -> None:
        self.is_logged_in = False

    def list_submissions(self) -> list[dict[str, Any]]:
        if not self.is_logged_in:
            raise AdminAccessError("Admin login required")
        if self._api is not None:
            return self._api.list_all()
        return [item.model_dump(by_alias=True) for item in self._store.submissions]
