import logging
from pathlib import Path
from typing import Callable

from ...clients.intake_api import IntakeApiClient, IntakeApiError
from .admin_gate import AdminGate, LocalCodeVerifier, LoginResult, ServerCodeVerifier
from .local_storage import LocalStorage
from .models import FormData, Submission
from .pricing import PriceQuote, price
from .submission_store import SubmissionStore
from .wizard import Step, WizardController, WizardStateError

logger = logging.getLogger(__name__)


class IntakeSession:
    """One active wizard run plus the cached submissions behind it.

    Build it with :meth:`create` when the application starts and drop it on
    reload. With an ``api_base_url`` the admin code is checked by the server,
    finished runs are also posted to it and the admin list comes from it.
    Without one, everything stays in local storage and ``admin_code`` is the
    embedded secret.
    """

    def __init__(
        self,
        wizard: WizardController,
        store: SubmissionStore,
        gate: AdminGate,
        api: IntakeApiClient | None = None,
    ):
        self.wizard = wizard
        self.store = store
        self.gate = gate
        self.api = api

    @classmethod
    def create(
        cls,
        storage_path: str | Path | None = None,
        api_base_url: str | None = None,
        admin_code: str | None = None,
    ) -> "IntakeSession":
        wizard = WizardController()
        store = SubmissionStore(LocalStorage(storage_path))
        store.load()

        api = IntakeApiClient(api_base_url) if api_base_url else None
        if api is not None:
            verifier = ServerCodeVerifier(api)
        elif admin_code:
            verifier = LocalCodeVerifier(admin_code)
        else:
            raise ValueError("admin_code is required when no api_base_url is given")

        gate = AdminGate(verifier, wizard, store, api)
        return cls(wizard, store, gate, api)

    @property
    def form(self) -> FormData:
        return self.wizard.form

    @property
    def step(self) -> Step:
        return self.wizard.step

    def update_field(self, field: str, value: str) -> None:
        setattr(self.wizard.form, field, value)

    def quote(self) -> PriceQuote:
        return price(self.form.campaign_goal)

    def next(self) -> bool:
        return self.wizard.advance()

    def back(self) -> bool:
        return self.wizard.retreat()

    def register(self) -> Submission:
        """Finish the run: cache the submission, then post it when online.

        The wizard is on Success before the post is attempted; a failed post
        raises :class:`IntakeApiError` and is not retried.
        """
        if self.wizard.step != Step.PRICE_SUMMARY:
            raise WizardStateError(f"Cannot register from step {self.wizard.step.name}")

        submission = self.store.register(self.form, self.quote())
        self.wizard.complete()

        if self.api is not None:
            try:
                self.api.submit(submission.model_dump(by_alias=True))
            except IntakeApiError:
                logger.exception("Failed to send submission id=%s", submission.id)
                raise
        return submission

    def open_admin(self) -> None:
        self.wizard.open_admin()

    def admin_login(self, code: str) -> LoginResult:
        return self.gate.login(code)

    def admin_logout(self) -> None:
        self.gate.logout()

    def delete_submission(self, submission_id: str, confirm: Callable[[str], bool]) -> bool:
        return self.store.delete(submission_id, confirm)

    def go_home(self) -> None:
        self.wizard.go_home()
