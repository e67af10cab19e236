"""Tests for month summaries and listings."""

from datetime import datetime
from decimal import Decimal

import pytest

from ledger_cycles.aggregation import (
    MonthFilter,
    card_usage,
    entries_in_month,
    list_month,
    summarize_month,
)
from ledger_cycles.models.ledger import Card, EntryKind, EntryStatus, SortField, SortOrder


class TestMonthFilter:
    """Tests for MonthFilter navigation and sorting."""

    def test_defaults(self) -> None:
        month_filter = MonthFilter(month=3, year=2024)

        assert month_filter.sort_by == SortField.DATE
        assert month_filter.sort_order == SortOrder.DESC

    @pytest.mark.parametrize(
        ("start", "shift", "expected"),
        [
            ((12, 2024), 1, (1, 2025)),
            ((1, 2024), -1, (12, 2023)),
            ((6, 2024), 0, (6, 2024)),
            ((3, 2024), -15, (12, 2022)),
        ],
    )
    def test_shift(self, start: tuple[int, int], shift: int, expected: tuple[int, int]) -> None:
        shifted = MonthFilter(month=start[0], year=start[1]).shift(shift)

        assert (shifted.month, shifted.year) == expected

    def test_toggle_same_field_flips_order(self) -> None:
        month_filter = MonthFilter(month=3, year=2024).toggle_sort(SortField.DATE)

        assert month_filter.sort_order == SortOrder.ASC
        assert month_filter.toggle_sort(SortField.DATE).sort_order == SortOrder.DESC

    def test_toggle_other_field_resets_to_desc(self) -> None:
        month_filter = MonthFilter(month=3, year=2024, sort_order=SortOrder.ASC)

        toggled = month_filter.toggle_sort(SortField.AMOUNT)

        assert toggled.sort_by == SortField.AMOUNT
        assert toggled.sort_order == SortOrder.DESC


class TestEntriesInMonth:
    """Tests for entries_in_month."""

    def test_card_expense_uses_cycle(self, make_entry, sample_card: Card) -> None:
        late_february = make_entry(datetime(2024, 2, 20, 12))
        early_march = make_entry(datetime(2024, 3, 5, 12))
        late_march = make_entry(datetime(2024, 3, 20, 12))

        selected = entries_in_month([late_february, early_march, late_march], [sample_card], 3, 2024)

        assert selected == [late_february, early_march]

    def test_unknown_card_falls_back_to_calendar_month(self, make_entry, sample_card: Card) -> None:
        orphan = make_entry(datetime(2024, 3, 20, 12), card_id="card-deleted")

        assert entries_in_month([orphan], [sample_card], 3, 2024) == [orphan]


class TestSummarizeMonth:
    """Tests for summarize_month."""

    def test_totals(self, make_entry, sample_card: Card) -> None:
        entries = [
            make_entry(datetime(2024, 3, 5, 12), "5000.00", kind=EntryKind.INCOME, status=EntryStatus.COMPLETED),
            make_entry(datetime(2024, 3, 25, 12), "300.00", kind=EntryKind.INCOME, status=EntryStatus.PENDING),
            make_entry(
                datetime(2024, 3, 10, 12),
                "1200.00",
                kind=EntryKind.EXPENSE,
                status=EntryStatus.COMPLETED,
                category="Apê",
            ),
            make_entry(datetime(2024, 3, 1, 12), "250.50", status=EntryStatus.PENDING, category="Mercado"),
            make_entry(datetime(2024, 2, 28, 12), "49.50", status=EntryStatus.PENDING, category="Mercado"),
        ]

        summary = summarize_month(entries, [sample_card], 3, 2024)

        assert summary.income == Decimal("5300.00")
        assert summary.expenses == Decimal("1500.00")
        assert summary.balance == Decimal("3800.00")
        assert summary.pending_income == Decimal("300.00")
        assert summary.pending_expenses == Decimal("300.00")
        assert summary.expenses_by_category == {
            "Apê": Decimal("1200.00"),
            "Mercado": Decimal("300.00"),
        }
        assert list(summary.expenses_by_category) == ["Apê", "Mercado"]

    def test_empty_month(self, sample_card: Card) -> None:
        summary = summarize_month([], [sample_card], 3, 2024)

        assert summary.income == Decimal("0")
        assert summary.balance == Decimal("0")
        assert summary.expenses_by_category == {}


class TestCardUsage:
    """Tests for card_usage."""

    def test_percentage(self, sample_card: Card) -> None:
        assert card_usage(sample_card, Decimal("1250.00")) == Decimal("25.00")

    def test_capped_at_hundred(self, sample_card: Card) -> None:
        assert card_usage(sample_card, Decimal("9000.00")) == Decimal("100.00")

    def test_zero_limit(self) -> None:
        card = Card(card_id="c", name="No limit", credit_limit=Decimal("0"), closing_day=1, due_day=10)

        assert card_usage(card, Decimal("10")) == Decimal("0")


class TestListMonth:
    """Tests for list_month."""

    def test_sorted_by_date_desc(self, make_entry) -> None:
        a = make_entry(datetime(2024, 3, 1, 12), "30.00", kind=EntryKind.EXPENSE)
        b = make_entry(datetime(2024, 3, 15, 12), "10.00", kind=EntryKind.EXPENSE)
        outside = make_entry(datetime(2024, 4, 1, 12), kind=EntryKind.EXPENSE)

        listed = list_month([a, b, outside], MonthFilter(month=3, year=2024))

        assert listed == [b, a]

    def test_sorted_by_amount_asc(self, make_entry) -> None:
        a = make_entry(datetime(2024, 3, 1, 12), "30.00", kind=EntryKind.EXPENSE)
        b = make_entry(datetime(2024, 3, 15, 12), "10.00", kind=EntryKind.EXPENSE)

        month_filter = MonthFilter(month=3, year=2024, sort_by=SortField.AMOUNT, sort_order=SortOrder.ASC)

        assert list_month([a, b], month_filter) == [b, a]

    def test_kind_filter(self, make_entry) -> None:
        income = make_entry(datetime(2024, 3, 1, 12), kind=EntryKind.INCOME)
        expense = make_entry(datetime(2024, 3, 2, 12), kind=EntryKind.EXPENSE)
        card = make_entry(datetime(2024, 3, 3, 12))

        listed = list_month(
            [income, expense, card],
            MonthFilter(month=3, year=2024),
            kinds={EntryKind.EXPENSE, EntryKind.CARD_EXPENSE},
        )

        assert listed == [card, expense]
