"""Month-level totals and listings for the ledger overview."""

from collections.abc import Collection, Iterable
from dataclasses import dataclass, field, replace
from decimal import ROUND_HALF_UP, Decimal
from operator import attrgetter

from ledger_cycles.cycles import in_calendar_month, resolve_cycle
from ledger_cycles.models.base import Cycle
from ledger_cycles.models.ledger import Card, Entry, EntryKind, EntryStatus, SortField, SortOrder

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class MonthFilter:
    """Month being viewed plus listing order.

    Passed explicitly to every call that needs it.
    """

    month: int  # 1-12
    year: int
    sort_by: SortField = SortField.DATE
    sort_order: SortOrder = SortOrder.DESC

    def shift(self, months: int) -> "MonthFilter":
        """Move the view by ``months`` (negative goes back), rolling the year."""
        year_offset, month_index = divmod(self.month - 1 + months, 12)
        return replace(self, month=month_index + 1, year=self.year + year_offset)

    def toggle_sort(self, sort_by: SortField) -> "MonthFilter":
        """Flip the order on the current field, or switch field sorting descending."""
        if sort_by == self.sort_by:
            order = SortOrder.ASC if self.sort_order == SortOrder.DESC else SortOrder.DESC
            return replace(self, sort_order=order)
        return replace(self, sort_by=sort_by, sort_order=SortOrder.DESC)


@dataclass
class MonthSummary:
    """Totals of one month, with card expenses counted in their billing cycle."""

    month: int
    year: int
    income: Decimal = ZERO
    expenses: Decimal = ZERO
    pending_income: Decimal = ZERO
    pending_expenses: Decimal = ZERO
    expenses_by_category: dict[str, Decimal] = field(default_factory=dict)

    @property
    def balance(self) -> Decimal:
        return self.income - self.expenses


def entries_in_month(
    entries: Iterable[Entry],
    cards: Iterable[Card],
    month: int,
    year: int,
) -> list[Entry]:
    """Entries that count towards a month.

    Card expenses count in the cycle their card resolves them to; when
    the card is unknown they fall back to their calendar month.
    """
    closing_days = {card.card_id: card.closing_day for card in cards}
    target = Cycle(year=year, month=month)

    selected = []
    for entry in entries:
        closing_day = closing_days.get(entry.card_id) if entry.is_card_expense else None
        if closing_day is not None:
            matches = resolve_cycle(entry.date, closing_day) == target
        else:
            matches = in_calendar_month(entry.date, month, year)
        if matches:
            selected.append(entry)
    return selected


def summarize_month(
    entries: Iterable[Entry],
    cards: Iterable[Card],
    month: int,
    year: int,
) -> MonthSummary:
    """Compute income, expense and pending totals for a month."""
    summary = MonthSummary(month=month, year=year)
    by_category: dict[str, Decimal] = {}

    for entry in entries_in_month(entries, cards, month, year):
        pending = entry.status == EntryStatus.PENDING
        if entry.kind == EntryKind.INCOME:
            summary.income += entry.amount
            if pending:
                summary.pending_income += entry.amount
        else:
            summary.expenses += entry.amount
            if pending:
                summary.pending_expenses += entry.amount
            by_category[entry.category] = by_category.get(entry.category, ZERO) + entry.amount

    summary.expenses_by_category = dict(
        sorted(by_category.items(), key=lambda item: item[1], reverse=True)
    )
    return summary


def card_usage(card: Card, invoice_total: Decimal) -> Decimal:
    """Percentage of the card limit taken by an invoice, capped at 100.

    Display only; limits are never enforced.
    """
    if card.credit_limit <= 0:
        return ZERO
    usage = min(invoice_total / card.credit_limit * HUNDRED, HUNDRED)
    return usage.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def list_month(
    entries: Iterable[Entry],
    month_filter: MonthFilter,
    kinds: Collection[EntryKind] | None = None,
) -> list[Entry]:
    """Entries dated in the filter's calendar month, sorted per the filter."""
    selected = [
        e
        for e in entries
        if in_calendar_month(e.date, month_filter.month, month_filter.year)
        and (kinds is None or e.kind in kinds)
    ]

    key = attrgetter("amount") if month_filter.sort_by == SortField.AMOUNT else attrgetter("date")
    return sorted(selected, key=key, reverse=month_filter.sort_order == SortOrder.DESC)
