import json
import logging
import secrets
import string
from datetime import datetime
from typing import Callable

from pydantic import ValidationError

from .local_storage import LocalStorage
from .models import FormData, Submission
from .pricing import PriceQuote, format_submission_price

logger = logging.getLogger(__name__)

STORAGE_KEY = "tat_pro_submissions"
DELETE_PROMPT = "האם למחוק?"
ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


def new_submission_id() -> str:
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def format_timestamp(moment: datetime) -> str:
    # he-IL short date and 24h time, e.g. "19.10.2026, 15:59:00"
    return f"{moment.day}.{moment.month}.{moment.year}, {moment:%H:%M:%S}"


class SubmissionStore:
    """Local cache of finished submissions.

    The whole list is written under one storage key after each change, and
    the in-memory list is only swapped in once that write has succeeded.
    """

    def __init__(self, storage: LocalStorage, clock: Callable[[], datetime] = datetime.now):
        self.storage = storage
        self._clock = clock
        self._submissions: list[Submission] = []

    @property
    def submissions(self) -> list[Submission]:
        return list(self._submissions)

    def load(self) -> list[Submission]:
        try:
            raw = self.storage.get_item(STORAGE_KEY)
        except (OSError, ValueError):
            logger.exception("Failed to read stored submissions")
            raw = None

        if not raw:
            self._submissions = []
            return self.submissions

        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError("stored submissions are not a list")
            self._submissions = [Submission.model_validate(item) for item in items]
        except (ValueError, ValidationError):
            logger.exception("Failed to load submissions")
            self._submissions = []
        return self.submissions

    def _persist(self, submissions: list[Submission]) -> None:
        payload = json.dumps(
            [item.model_dump(by_alias=True) for item in submissions],
            ensure_ascii=False,
        )
        self.storage.set_item(STORAGE_KEY, payload)
        self._submissions = submissions

    def register(self, form: FormData, quote: PriceQuote) -> Submission:
        submission = Submission(
            **form.model_dump(),
            id=new_submission_id(),
            timestamp=format_timestamp(self._clock()),
            calculated_price=format_submission_price(quote),
        )
        self._persist([*self._submissions, submission])
        logger.info("Registered submission id=%s", submission.id)
        return submission

    def delete(self, submission_id: str, confirm: Callable[[str], bool]) -> bool:
        if not confirm(DELETE_PROMPT):
            return False
        remaining = [item for item in self._submissions if item.id != submission_id]
        if len(remaining) == len(self._submissions):
            return False
        self._persist(remaining)
        logger.info("Deleted submission id=%s", submission_id)
        return True
