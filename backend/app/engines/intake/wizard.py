"""Linear step controller for the intake wizard.

Steps only move one at a time. ``advance`` is gated by the current step's
required fields, ``retreat`` is not. The Success step is reached through
``complete`` once a submission has been registered, and the Admin step is a
side channel that can be opened from anywhere.
"""

from dataclasses import dataclass
from enum import IntEnum

from .models import FormData

TOTAL_STEPS = 6
NEXT_LABEL = "המשך לשלב הבא"
CALCULATE_LABEL = "חשב הצעת מחיר"


class Step(IntEnum):
    WELCOME = 0
    INITIAL_DETAILS = 1
    CAMPAIGN_DETAILS = 2
    CLEARING_DETAILS = 3
    SPECIAL_REMARKS = 4
    PRICE_SUMMARY = 5
    SUCCESS = 6
    ADMIN = 7


REQUIRED_FIELDS: dict[Step, tuple[str, ...]] = {
    Step.INITIAL_DETAILS: ("yeshiva_name", "manager_name", "phone_number"),
    Step.CAMPAIGN_DETAILS: ("campaign_duration", "campaign_goal", "average_students"),
    Step.CLEARING_DETAILS: ("uses_field_devices", "clearing_company"),
}
DEVICE_FIELDS = ("device_count", "device_type", "device_provider")


class WizardStateError(RuntimeError):
    """Raised when a lifecycle action is attempted from the wrong step."""


@dataclass(frozen=True)
class NavState:
    show_footer: bool
    show_forward: bool
    forward_enabled: bool
    forward_label: str


def missing_fields(form: FormData, step: Step) -> list[str]:
    required = list(REQUIRED_FIELDS.get(step, ()))
    if step == Step.CLEARING_DETAILS and form.uses_field_devices == "yes":
        required.extend(DEVICE_FIELDS)
    return [name for name in required if not getattr(form, name)]


def validate_step(form: FormData, step: Step) -> bool:
    return not missing_fields(form, step)


class WizardController:
    def __init__(self, form: FormData | None = None, step: Step = Step.WELCOME):
        self.form = form if form is not None else FormData()
        self.step = step

    @property
    def in_linear_flow(self) -> bool:
        return self.step <= Step.PRICE_SUMMARY

    def can_advance(self) -> bool:
        return self.in_linear_flow and validate_step(self.form, self.step)

    def advance(self) -> bool:
        if not self.can_advance():
            return False
        target = Step(min(self.step + 1, Step.PRICE_SUMMARY))
        changed = target != self.step
        self.step = target
        return changed

    def retreat(self) -> bool:
        if not self.in_linear_flow:
            return False
        target = Step(max(self.step - 1, Step.WELCOME))
        changed = target != self.step
        self.step = target
        return changed

    def complete(self) -> None:
        if self.step != Step.PRICE_SUMMARY:
            raise WizardStateError(f"Cannot register from step {self.step.name}")
        self.step = Step.SUCCESS

    def open_admin(self) -> None:
        self.step = Step.ADMIN

    def go_home(self) -> None:
        self.step = Step.WELCOME

    @property
    def shows_progress(self) -> bool:
        return Step.WELCOME < self.step < Step.SUCCESS

    @property
    def progress(self) -> float:
        return (int(self.step) + 1) / TOTAL_STEPS

    @property
    def step_caption(self) -> str | None:
        if not self.shows_progress:
            return None
        return f"STEP {int(self.step)} OF {TOTAL_STEPS - 1}"

    @property
    def nav(self) -> NavState:
        show_footer = self.step not in (Step.WELCOME, Step.SUCCESS, Step.ADMIN)
        show_forward = show_footer and self.step < Step.PRICE_SUMMARY
        return NavState(
            show_footer=show_footer,
            show_forward=show_forward,
            forward_enabled=show_forward and validate_step(self.form, self.step),
            forward_label=CALCULATE_LABEL if self.step == Step.SPECIAL_REMARKS else NEXT_LABEL,
        )
