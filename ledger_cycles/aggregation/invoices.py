"""Monthly virtual invoice aggregation."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from ledger_cycles.cycles import calendar_date, in_calendar_month, resolve_cycle
from ledger_cycles.models.base import Cycle
from ledger_cycles.models.ledger import Card, Entry, EntryStatus, VirtualInvoice

logger = logging.getLogger(__name__)


@dataclass
class _InvoiceAccumulator:
    """Running total and membership of one card while scanning entries."""

    card: Card
    total: Decimal = Decimal("0")
    members: list[Entry] = field(default_factory=list)

    def add(self, entry: Entry) -> None:
        self.total += entry.amount
        self.members.append(entry)

    def build(self, month: int, year: int) -> VirtualInvoice:
        completed = all(m.status == EntryStatus.COMPLETED for m in self.members)
        return VirtualInvoice(
            invoice_id=VirtualInvoice.make_id(self.card.card_id, month, year),
            card_id=self.card.card_id,
            description=f"Invoice {self.card.name}",
            month=month,
            year=year,
            total=self.total,
            due_date=calendar_date(year, month, self.card.due_day),
            status=EntryStatus.COMPLETED if self.members and completed else EntryStatus.PENDING,
            entry_ids=tuple(m.entry_id for m in self.members),
        )


def belongs_to_invoice(entry: Entry, card: Card, target: Cycle) -> bool:
    """Check whether a card expense is billed on ``card``'s invoice for ``target``."""
    return (
        entry.is_card_expense
        and entry.card_id == card.card_id
        and resolve_cycle(entry.date, card.closing_day) == target
    )


def invoice_members(
    entries: Iterable[Entry],
    card: Card,
    target_month: int,
    target_year: int,
) -> list[Entry]:
    """Return the card expenses backing one card's invoice, in input order."""
    target = Cycle(year=target_year, month=target_month)
    return [e for e in entries if belongs_to_invoice(e, card, target)]


def aggregate(
    entries: Iterable[Entry],
    cards: Iterable[Card],
    target_month: int,
    target_year: int,
) -> tuple[list[Entry], list[VirtualInvoice]]:
    """Split a month's view into plain entries and per-card virtual invoices.

    Parameters
    ----------
    entries : Iterable[Entry]
        Every raw entry of the user.
    cards : Iterable[Card]
        Card definitions used to resolve ``card_id`` references.
    target_month : int
        Month being viewed (1-12).
    target_year : int
        Year being viewed.

    Returns
    -------
    tuple[list[Entry], list[VirtualInvoice]]
        Non-card entries dated in the target calendar month, unchanged,
        and one invoice per card with at least one member, in card order.
        Card expenses whose card is unknown appear in neither list.
    """
    target = Cycle(year=target_year, month=target_month)
    accumulators = {card.card_id: _InvoiceAccumulator(card) for card in cards}

    non_card_entries: list[Entry] = []
    for entry in entries:
        if not entry.is_card_expense:
            if in_calendar_month(entry.date, target_month, target_year):
                non_card_entries.append(entry)
            continue

        acc = accumulators.get(entry.card_id)
        if acc is None:
            logger.debug("Skipping entry %s: unknown card %s", entry.entry_id, entry.card_id)
            continue

        if resolve_cycle(entry.date, acc.card.closing_day) == target:
            acc.add(entry)

    invoices = [
        acc.build(target_month, target_year)
        for acc in accumulators.values()
        if acc.members
    ]
    return non_card_entries, invoices
