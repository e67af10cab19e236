"""Base models shared across the ledger."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True, order=True)
class Cycle:
    """Billing cycle key: the (month, year) an entry is billed in.

    Ordering compares year first so cycles sort chronologically.
    """

    year: int
    month: int  # 1-12

    def next(self) -> "Cycle":
        if self.month == 12:
            return Cycle(year=self.year + 1, month=1)
        return Cycle(year=self.year, month=self.month + 1)

    def previous(self) -> "Cycle":
        if self.month == 1:
            return Cycle(year=self.year - 1, month=12)
        return Cycle(year=self.year, month=self.month - 1)

    @classmethod
    def of(cls, value: date) -> "Cycle":
        """Calendar cycle of a date, ignoring any closing day."""
        return cls(year=value.year, month=value.month)


@dataclass(frozen=True)
class CycleBounds:
    """Inclusive date window of one invoice cycle."""

    start: date
    end: date

    def contains(self, value: date) -> bool:
        if isinstance(value, datetime):
            value = value.date()
        return self.start <= value <= self.end
