"""Ledger entry models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ledger_cycles.models.ledger.enums import EntryKind, EntryStatus


@dataclass(frozen=True)
class InstallmentLink:
    """Membership of an entry in an installment series."""

    group_id: str
    position: int  # 1-based
    count: int


@dataclass
class Entry:
    """Raw ledger record (income, expense or card expense)."""

    entry_id: str
    description: str
    amount: Decimal
    date: datetime  # normalized to a fixed hour, see ledger_cycles.cycles.normalize_date
    kind: EntryKind
    category: str
    status: EntryStatus = EntryStatus.PENDING
    card_id: str | None = None  # required for CARD_EXPENSE
    installment: InstallmentLink | None = None

    @property
    def group_id(self) -> str | None:
        return self.installment.group_id if self.installment else None

    @property
    def is_card_expense(self) -> bool:
        return self.kind == EntryKind.CARD_EXPENSE
