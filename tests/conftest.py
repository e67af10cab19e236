"""Pytest configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

import pytest
from faker import Faker

from ledger_cycles.models.ledger import Card, Entry, EntryKind, EntryStatus


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def fake(seed: int) -> Faker:
    """Seeded Faker for realistic descriptions."""
    faker = Faker("pt_BR")
    faker.seed_instance(seed)
    return faker


@pytest.fixture
def sample_user_id() -> str:
    """Sample user ID."""
    return "user-test-001"


@pytest.fixture
def sample_card() -> Card:
    """Card closing on the 10th, due on the 17th."""
    return Card(
        card_id="card-test-001",
        name="Nubank",
        credit_limit=Decimal("5000.00"),
        closing_day=10,
        due_day=17,
        color="purple",
    )


@pytest.fixture
def other_card() -> Card:
    """Card closing on the 25th, due on the 5th."""
    return Card(
        card_id="card-test-002",
        name="Itaú",
        credit_limit=Decimal("2000.00"),
        closing_day=25,
        due_day=5,
        color="orange",
    )


@pytest.fixture
def make_entry(fake: Faker) -> Callable[..., Entry]:
    """Factory for entries with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(
        when: datetime,
        amount: str = "100.00",
        kind: EntryKind = EntryKind.CARD_EXPENSE,
        status: EntryStatus = EntryStatus.PENDING,
        card_id: str | None = "card-test-001",
        **kwargs,
    ) -> Entry:
        return Entry(
            entry_id=kwargs.pop("entry_id", f"entry-{next(counter):04d}"),
            description=kwargs.pop("description", fake.company()),
            amount=Decimal(amount),
            date=when,
            kind=kind,
            category=kwargs.pop("category", "Mercado"),
            status=status,
            card_id=card_id if kind == EntryKind.CARD_EXPENSE else None,
            **kwargs,
        )

    return _make
