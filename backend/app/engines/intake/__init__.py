"""Client-side intake flow: wizard, pricing, local cache and admin gate."""

from .admin_gate import AdminAccessError, AdminGate, LocalCodeVerifier, LoginResult, ServerCodeVerifier
from .models import FormData, Submission
from .pricing import PriceQuote, price
from .session import IntakeSession
from .submission_store import SubmissionStore
from .wizard import Step, WizardController, WizardStateError

__all__ = [
    "AdminAccessError",
    "AdminGate",
    "FormData",
    "IntakeSession",
    "LocalCodeVerifier",
    "LoginResult",
    "PriceQuote",
    "ServerCodeVerifier",
    "Step",
    "Submission",
    "SubmissionStore",
    "WizardController",
    "WizardStateError",
    "price",
]
