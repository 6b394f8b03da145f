"""Tiered campaign price lookup.

The price depends only on the campaign goal. Goals are compared against the
upper bound of each tier in ascending order, so every bound is inclusive::

    goal <= 200,000  ->  6,500
    goal <= 300,000  ->  7,500
    goal <= 400,000  ->  8,500
    goal <= 500,000  ->  9,900
    goal  > 500,000  ->  no fixed price, the client has to be contacted

A goal that is empty, unparsable or zero has no price at all.
"""

import math
import re
from dataclasses import dataclass

PRICE_TIERS: tuple[tuple[float, int], ...] = (
    (200_000, 6500),
    (300_000, 7500),
    (400_000, 8500),
    (500_000, 9900),
)
CURRENCY_SYMBOL = "₪"
NOT_APPLICABLE_LABEL = "N/A"
CONTACT_LABEL = "צור קשר"
CUSTOM_PRICE_LABEL = "התאמה אישית"

_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_LEADING_INFINITY = re.compile(r"^[+-]?Infinity")


@dataclass(frozen=True)
class PriceQuote:
    amount: int | None
    formatted: str

    @property
    def requires_contact(self) -> bool:
        return self.amount is None

    @property
    def is_applicable(self) -> bool:
        return self.amount != 0


NOT_APPLICABLE = PriceQuote(amount=0, formatted=NOT_APPLICABLE_LABEL)
CONTACT_REQUIRED = PriceQuote(amount=None, formatted=CONTACT_LABEL)


def parse_goal(raw: str | float | int | None) -> float:
    """Read a goal the way a browser ``parseFloat`` would; NaN becomes 0."""
    if raw is None:
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
        return 0.0 if math.isnan(value) else value

    text = str(raw).lstrip()
    match = _LEADING_INFINITY.match(text)
    if match:
        return -math.inf if match.group(0).startswith("-") else math.inf
    match = _LEADING_NUMBER.match(text)
    if not match:
        return 0.0
    return float(match.group(0))


def format_currency(amount: int) -> str:
    return f"{CURRENCY_SYMBOL}{amount:,}"


def price(goal: str | float | int | None) -> PriceQuote:
    value = parse_goal(goal)
    if value == 0:
        return NOT_APPLICABLE

    for upper_bound, amount in PRICE_TIERS:
        if value <= upper_bound:
            return PriceQuote(amount=amount, formatted=format_currency(amount))
    return CONTACT_REQUIRED


def format_submission_price(quote: PriceQuote) -> str:
    if quote.requires_contact:
        return CUSTOM_PRICE_LABEL
    return format_currency(quote.amount or 0)
