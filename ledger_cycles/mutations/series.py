"""Forward edits and deletions of installment series."""

import logging
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from ledger_cycles.cycles import NOON, add_months, normalize_date
from ledger_cycles.exceptions import InvalidEntityStateError
from ledger_cycles.models.ledger import Entry, EntryUpdate

logger = logging.getLogger(__name__)

# Fields a forward edit may rewrite; installment link and id stay fixed.
EDITABLE_FIELDS = frozenset({"description", "amount", "category", "kind", "card_id"})


def series_members(entries: Iterable[Entry], group_id: str) -> list[Entry]:
    """All entries of one series, ordered by position."""
    members = [e for e in entries if e.installment and e.installment.group_id == group_id]
    return sorted(members, key=lambda e: e.installment.position)


def update_forward(
    entries: Iterable[Entry],
    group_id: str,
    anchor_position: int,
    new_anchor_date: date | datetime | str,
    field_updates: dict[str, Any] | None = None,
    normalized_hour: int = NOON,
) -> list[EntryUpdate]:
    """Re-date and edit one installment and every later one.

    Members at ``position >= anchor_position`` are dated
    ``new_anchor_date`` advanced by ``position - anchor_position``
    calendar months and receive ``field_updates``. Earlier members are
    left as they are.

    Raises
    ------
    InvalidEntityStateError
        If ``field_updates`` names a field outside :data:`EDITABLE_FIELDS`.
    """
    field_updates = dict(field_updates or {})
    forbidden = set(field_updates) - EDITABLE_FIELDS
    if forbidden:
        raise InvalidEntityStateError(
            f"Fields cannot be changed on a series: {', '.join(sorted(forbidden))}"
        )

    anchor = normalize_date(new_anchor_date, normalized_hour)

    updates = []
    for member in series_members(entries, group_id):
        offset = member.installment.position - anchor_position
        if offset < 0:
            continue
        changes = {**field_updates, "date": add_months(anchor, offset)}
        updates.append(EntryUpdate(entry_id=member.entry_id, changes=changes))

    logger.info(
        "Forward update of group %s from position %d touches %d entries",
        group_id,
        anchor_position,
        len(updates),
        extra={"group_id": group_id},
    )
    return updates


def delete_forward(
    entries: Iterable[Entry],
    group_id: str,
    cutoff_date: date | datetime | str,
    normalized_hour: int = NOON,
) -> list[str]:
    """Ids of the series members dated on or after ``cutoff_date``."""
    cutoff = normalize_date(cutoff_date, normalized_hour)
    doomed = [
        m.entry_id
        for m in series_members(entries, group_id)
        if normalize_date(m.date, normalized_hour) >= cutoff
    ]

    logger.info(
        "Forward delete of group %s from %s removes %d entries",
        group_id,
        cutoff.date(),
        len(doomed),
        extra={"group_id": group_id},
    )
    return doomed
