"""Credit card model."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class Card:
    """Credit card definition."""

    card_id: str
    name: str
    credit_limit: Decimal
    closing_day: int  # 1-31, caller-validated
    due_day: int  # 1-31, caller-validated
    color: str = "slate"
