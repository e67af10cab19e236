"""Virtual invoice model."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ledger_cycles.models.ledger.enums import EntryStatus


@dataclass(frozen=True)
class VirtualInvoice:
    """Derived monthly invoice of one card. Never persisted."""

    invoice_id: str
    card_id: str
    description: str
    month: int
    year: int
    total: Decimal
    due_date: date
    status: EntryStatus
    entry_ids: tuple[str, ...] = field(default_factory=tuple)

    @staticmethod
    def make_id(card_id: str, month: int, year: int) -> str:
        return f"invoice-{card_id}-{year:04d}-{month:02d}"
