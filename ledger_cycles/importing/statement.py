"""Validation of parsed statement lines against an invoice cycle."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from ledger_cycles.cycles import NOON, cycle_bounds
from ledger_cycles.generators.base import BaseGenerator
from ledger_cycles.models.base import CycleBounds
from ledger_cycles.models.ledger import Card, Entry, EntryKind, EntryStatus

logger = logging.getLogger(__name__)

INVALID_DATE = "invalid_date"
OUT_OF_CYCLE = "out_of_cycle"
INVALID_AMOUNT = "invalid_amount"


@dataclass(frozen=True)
class StatementCandidate:
    """One line returned by the statement parsing service."""

    description: str
    amount: Decimal | None  # None when the parser returned something unreadable
    date: str  # as printed on the statement, e.g. 25/01/2024
    category: str
    is_income: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StatementCandidate":
        """Build a candidate from the parsing service's JSON shape.

        Expected keys: ``description``, ``amount``, ``date``, ``category``
        and ``type`` (``INCOME`` or ``EXPENSE``).
        """
        try:
            amount: Decimal | None = abs(Decimal(str(data.get("amount"))))
        except InvalidOperation:
            amount = None
        if amount is not None and not amount.is_finite():
            amount = None
        return cls(
            description=str(data.get("description", "")).strip(),
            amount=amount,
            date=str(data.get("date", "")),
            category=str(data.get("category") or "Outros"),
            is_income=str(data.get("type", "")).upper() == "INCOME",
        )


@dataclass(frozen=True)
class RejectedCandidate:
    candidate: StatementCandidate
    reason: str


@dataclass
class ImportResult:
    """Outcome of validating a statement for one invoice."""

    bounds: CycleBounds
    accepted: list[Entry] = field(default_factory=list)
    rejected: list[RejectedCandidate] = field(default_factory=list)


class StatementImporter(BaseGenerator):
    """Turn statement candidates into card entries of a chosen invoice."""

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "pt_BR",
        date_format: str = "%d/%m/%Y",
        default_closing_day: int = 1,
        normalized_hour: int = NOON,
    ) -> None:
        super().__init__(seed, locale)
        self.date_format = date_format
        self.default_closing_day = default_closing_day
        self.normalized_hour = normalized_hour

    @classmethod
    def from_config(cls, config) -> "StatementImporter":
        """Build an importer from a :class:`~ledger_cycles.config.LedgerConfig`."""
        return cls(
            seed=config.seed,
            locale=config.locale,
            date_format=config.importing.date_format,
            default_closing_day=config.importing.default_closing_day,
            normalized_hour=config.dates.normalized_hour,
        )

    def parse_date(self, value: str) -> datetime | None:
        """Parse a statement date, pinned to the normalized hour, or None.

        The text must match ``date_format`` exactly, zero padding included,
        so ``1/3/2024`` is refused under ``%d/%m/%Y``.
        """
        try:
            text = value.strip()
            parsed = datetime.strptime(text, self.date_format)
        except (ValueError, AttributeError):
            return None
        if parsed.strftime(self.date_format) != text:
            return None
        return parsed.replace(hour=self.normalized_hour)

    def import_candidates(
        self,
        candidates: Iterable[StatementCandidate],
        card: Card,
        target_month: int,
        target_year: int,
    ) -> ImportResult:
        """Accept the candidates dated inside the invoice's cycle window.

        Parameters
        ----------
        candidates : Iterable[StatementCandidate]
            Lines returned by the statement parser.
        card : Card
            Card whose invoice is being imported.
        target_month : int
            Invoice month (1-12).
        target_year : int
            Invoice year.

        Returns
        -------
        ImportResult
            Accepted entries (COMPLETED, linked to ``card``) and the
            rejected candidates with their reason.
        """
        closing_day = card.closing_day or self.default_closing_day
        result = ImportResult(bounds=cycle_bounds(target_month, target_year, closing_day))

        for candidate in candidates:
            if candidate.amount is None:
                logger.debug("Rejecting %r: unreadable amount", candidate.description)
                result.rejected.append(RejectedCandidate(candidate, INVALID_AMOUNT))
                continue

            entry_date = self.parse_date(candidate.date)
            if entry_date is None:
                logger.debug("Rejecting %r: invalid date %r", candidate.description, candidate.date)
                result.rejected.append(RejectedCandidate(candidate, INVALID_DATE))
                continue

            if not result.bounds.contains(entry_date):
                logger.debug("Rejecting %r: %s outside cycle", candidate.description, entry_date.date())
                result.rejected.append(RejectedCandidate(candidate, OUT_OF_CYCLE))
                continue

            result.accepted.append(
                Entry(
                    entry_id=self.new_id(),
                    description=candidate.description,
                    amount=candidate.amount,
                    date=entry_date,
                    kind=EntryKind.INCOME if candidate.is_income else EntryKind.CARD_EXPENSE,
                    category=candidate.category,
                    status=EntryStatus.COMPLETED,
                    card_id=card.card_id,
                )
            )

        logger.info(
            "Statement import for %s %04d-%02d: %d accepted, %d rejected",
            card.card_id,
            target_year,
            target_month,
            len(result.accepted),
            len(result.rejected),
            extra={"card_id": card.card_id, "invoice_month": f"{target_year:04d}-{target_month:02d}"},
        )
        return result
