"""Payment-status propagation from virtual invoices to their entries."""

import logging
from collections.abc import Iterable

from ledger_cycles.aggregation.invoices import invoice_members
from ledger_cycles.models.ledger import Card, Entry, EntryStatus, EntryUpdate

logger = logging.getLogger(__name__)


def next_status(current: EntryStatus) -> EntryStatus:
    """Flip between PENDING and COMPLETED."""
    if current == EntryStatus.COMPLETED:
        return EntryStatus.PENDING
    return EntryStatus.COMPLETED


def toggle_invoice_status(
    card_id: str,
    target_month: int,
    target_year: int,
    entries: Iterable[Entry],
    cards: Iterable[Card],
    new_status: EntryStatus,
) -> list[str]:
    """Ids of every entry backing a card's invoice for the target month.

    The membership is the same set :func:`~ledger_cycles.aggregation.aggregate`
    builds, so writing ``new_status`` to all of them in one batch makes the
    next aggregation derive that status for the invoice. An unknown card
    yields an empty list.
    """
    card = next((c for c in cards if c.card_id == card_id), None)
    if card is None:
        logger.debug("No card %s; nothing to toggle", card_id)
        return []

    member_ids = [e.entry_id for e in invoice_members(entries, card, target_month, target_year)]
    logger.info(
        "Invoice %s %04d-%02d -> %s covers %d entries",
        card_id,
        target_year,
        target_month,
        new_status.value,
        len(member_ids),
        extra={"card_id": card_id, "invoice_month": f"{target_year:04d}-{target_month:02d}"},
    )
    return member_ids


def status_updates(member_ids: Iterable[str], new_status: EntryStatus) -> list[EntryUpdate]:
    """Turn member ids into status write intents."""
    return [EntryUpdate(entry_id=entry_id, changes={"status": new_status}) for entry_id in member_ids]
