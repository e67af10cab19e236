#!/usr/bin/env python3
"""Generate a sample ledger and export one month's invoices.

Builds a few cards, random single and installment purchases, applies
them to an in-memory store and writes entries, invoices and the month
summary as JSON files for manual inspection.
"""

import argparse
import logging
import random
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ledger_cycles.aggregation import aggregate, card_usage, summarize_month
from ledger_cycles.config import LedgerConfig
from ledger_cycles.generators import InstallmentSeriesGenerator
from ledger_cycles.logging import setup_logging
from ledger_cycles.models.ledger import AmountMode, Card, Entry, EntryKind, EntryStatus
from ledger_cycles.sinks import JsonFileSink, invoice_to_dict
from ledger_cycles.store import LedgerDataStore

logger = logging.getLogger(__name__)

USER_ID = "sample-user"

EXPENSE_CATEGORIES = ["Alimentação", "Mercado", "Transporte", "Lazer", "Saúde", "Vestuário"]


def build_cards(generator: InstallmentSeriesGenerator) -> list[Card]:
    """Create a handful of cards with varied closing days."""
    return [
        Card(
            card_id=generator.new_id(),
            name=f"{brand} {generator.fake.last_name()}",
            credit_limit=Decimal(random.randint(2, 20) * 1000),
            closing_day=random.randint(1, 28),
            due_day=random.randint(1, 28),
            color=color,
        )
        for brand, color in (("Visa", "indigo"), ("Master", "rose"), ("Elo", "emerald"))
    ]


def build_entries(
    generator: InstallmentSeriesGenerator,
    cards: list[Card],
    month: int,
    year: int,
    purchases: int,
) -> list[Entry]:
    """Create salary, bills and card purchases around the target month."""
    fake = generator.fake
    entries = [
        Entry(
            entry_id=generator.new_id(),
            description="Salário",
            amount=Decimal(random.randint(3000, 12000)),
            date=datetime(year, month, 5),
            kind=EntryKind.INCOME,
            category="Salário",
            status=EntryStatus.COMPLETED,
        ),
        Entry(
            entry_id=generator.new_id(),
            description="Aluguel",
            amount=Decimal(random.randint(800, 3000)),
            date=datetime(year, month, 10),
            kind=EntryKind.EXPENSE,
            category="Apê",
        ),
    ]

    for _ in range(purchases):
        card = random.choice(cards)
        purchase_date = fake.date_between_dates(
            datetime(year, month, 1) if month > 1 else datetime(year - 1, 12, 1),
            datetime(year, month, 28),
        )
        template = Entry(
            entry_id="",
            description=fake.company(),
            amount=Decimal(str(round(random.uniform(20, 2000), 2))),
            date=purchase_date,
            kind=EntryKind.CARD_EXPENSE,
            category=random.choice(EXPENSE_CATEGORIES),
            status=random.choice(list(EntryStatus)),
            card_id=card.card_id,
        )
        count = random.choices([1, 2, 3, 6, 10, 12], weights=[0.5, 0.1, 0.15, 0.1, 0.1, 0.05], k=1)[0]
        entries.extend(generator.generate(template, count, AmountMode.TOTAL))

    return entries


def main() -> None:
    """Generate the sample ledger files."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--month", type=int, default=datetime.now().month)
    parser.add_argument("--year", type=int, default=datetime.now().year)
    parser.add_argument("--purchases", type=int, default=25)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    config = LedgerConfig.from_env()
    if args.seed is not None:
        config.seed = args.seed
    setup_logging(config.log_level, config.log_format)

    generator = InstallmentSeriesGenerator.from_config(config)
    store = LedgerDataStore()

    cards = build_cards(generator)
    for card in cards:
        store.add_card(USER_ID, card)
    store.add_entries(USER_ID, build_entries(generator, cards, args.month, args.year, args.purchases))

    entries = store.list_entries(USER_ID)
    plain, invoices = aggregate(entries, cards, args.month, args.year)
    summary = summarize_month(entries, cards, args.month, args.year)

    cards_by_id = {card.card_id: card for card in cards}
    for invoice in invoices:
        logger.info(
            "%s: total %s due %s (%s%% of limit, %s)",
            invoice.description,
            invoice.total,
            invoice.due_date,
            card_usage(cards_by_id[invoice.card_id], invoice.total),
            invoice.status.value,
        )

    sink = JsonFileSink.from_config(config)
    sink.write_batch("cards", cards)
    sink.write_batch("entries", entries)
    sink.write_batch("month_entries", plain)
    sink.write_batch("invoices", [invoice_to_dict(invoice) for invoice in invoices])
    sink.write_batch("summary", [summary])
    sink.close()

    logger.info("Store summary: %s", store.summary())


if __name__ == "__main__":
    main()
