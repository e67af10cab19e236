"""In-memory ledger store applying write batches atomically."""

import logging
from dataclasses import dataclass, field

from ledger_cycles.exceptions import (
    EntityNotFoundError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
)
from ledger_cycles.models.ledger import Card, Entry, EntryUpdate, LedgerBatch

logger = logging.getLogger(__name__)


@dataclass
class LedgerDataStore:
    """In-memory store for cards and entries, scoped per user."""

    # Primary entities
    cards: dict[str, Card] = field(default_factory=dict)
    entries: dict[str, Entry] = field(default_factory=dict)

    # Relationship indexes
    _user_cards: dict[str, list[str]] = field(default_factory=dict)
    _user_entries: dict[str, list[str]] = field(default_factory=dict)
    _group_entries: dict[str, list[str]] = field(default_factory=dict)

    # Cards
    def add_card(self, user_id: str, card: Card) -> None:
        """Add a card to a user's wallet."""
        if card.card_id in self.cards:
            raise InvalidEntityStateError(f"Card {card.card_id} already exists")
        self.cards[card.card_id] = card
        self._user_cards.setdefault(user_id, []).append(card.card_id)

    def update_card(self, user_id: str, card: Card) -> None:
        """Replace a stored card definition."""
        self._require_card(user_id, card.card_id)
        self.cards[card.card_id] = card

    def delete_card(self, user_id: str, card_id: str) -> None:
        """Remove a card. Entries referencing it are kept and stop aggregating."""
        self._require_card(user_id, card_id)
        del self.cards[card_id]
        self._user_cards[user_id].remove(card_id)

    def list_cards(self, user_id: str) -> list[Card]:
        """Get all cards of a user."""
        return [self.cards[cid] for cid in self._user_cards.get(user_id, [])]

    # Entries
    def add_entry(self, user_id: str, entry: Entry) -> None:
        self.apply(user_id, LedgerBatch(creates=[entry]))

    def add_entries(self, user_id: str, entries: list[Entry]) -> None:
        self.apply(user_id, LedgerBatch(creates=list(entries)))

    def update_entry(self, user_id: str, update: EntryUpdate) -> None:
        self.apply(user_id, LedgerBatch(updates=[update]))

    def update_entries(self, user_id: str, updates: list[EntryUpdate]) -> None:
        self.apply(user_id, LedgerBatch(updates=list(updates)))

    def delete_entry(self, user_id: str, entry_id: str) -> None:
        self.apply(user_id, LedgerBatch(deletes=[entry_id]))

    def delete_entries(self, user_id: str, entry_ids: list[str]) -> None:
        self.apply(user_id, LedgerBatch(deletes=list(entry_ids)))

    def apply(self, user_id: str, batch: LedgerBatch) -> None:
        """Apply creates, then updates, then deletes as one unit.

        Every write is validated against a staged copy before anything is
        committed, so a failing batch leaves the store unchanged.

        Raises
        ------
        EntityNotFoundError
            If an update or delete targets an entry the user does not own.
        ReferentialIntegrityError
            If a card expense would reference a card the user does not own.
        InvalidEntityStateError
            If a created entry id already exists.
        """
        owned = set(self._user_entries.get(user_id, []))
        user_cards = set(self._user_cards.get(user_id, []))
        staged: dict[str, Entry] = {}

        for entry in batch.creates:
            if entry.entry_id in self.entries or entry.entry_id in staged:
                raise InvalidEntityStateError(f"Entry {entry.entry_id} already exists")
            self._check_card_reference(entry, user_cards)
            staged[entry.entry_id] = entry

        for update in batch.updates:
            current = staged.get(update.entry_id)
            if current is None:
                if update.entry_id not in owned:
                    raise EntityNotFoundError(f"Entry {update.entry_id} not found")
                current = self.entries[update.entry_id]
            updated = update.apply_to(current)
            self._check_card_reference(updated, user_cards)
            staged[update.entry_id] = updated

        for entry_id in batch.deletes:
            if entry_id not in owned and entry_id not in staged:
                raise EntityNotFoundError(f"Entry {entry_id} not found")

        # Commit
        for entry in staged.values():
            self._put(user_id, entry)
        for entry_id in dict.fromkeys(batch.deletes):
            self._remove(user_id, entry_id)

        logger.info(
            "Applied batch for user %s: %d created, %d updated, %d deleted",
            user_id,
            len(batch.creates),
            len(batch.updates),
            len(batch.deletes),
            extra={"user_id": user_id},
        )

    # Query methods
    def list_entries(self, user_id: str) -> list[Entry]:
        """Get all entries of a user, in insertion order."""
        return [self.entries[eid] for eid in self._user_entries.get(user_id, [])]

    def get_entry(self, user_id: str, entry_id: str) -> Entry:
        if entry_id not in self._user_entries.get(user_id, []):
            raise EntityNotFoundError(f"Entry {entry_id} not found")
        return self.entries[entry_id]

    def get_group(self, user_id: str, group_id: str) -> list[Entry]:
        """Get the members of an installment series, ordered by position."""
        owned = set(self._user_entries.get(user_id, []))
        members = [self.entries[eid] for eid in self._group_entries.get(group_id, []) if eid in owned]
        return sorted(members, key=lambda e: e.installment.position)

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "users": len(set(self._user_cards) | set(self._user_entries)),
            "cards": len(self.cards),
            "entries": len(self.entries),
            "series": sum(1 for ids in self._group_entries.values() if ids),
        }

    # Internals
    def _require_card(self, user_id: str, card_id: str) -> None:
        if card_id not in self._user_cards.get(user_id, []):
            raise EntityNotFoundError(f"Card {card_id} not found")

    @staticmethod
    def _check_card_reference(entry: Entry, user_cards: set[str]) -> None:
        if entry.is_card_expense and entry.card_id not in user_cards:
            raise ReferentialIntegrityError(f"Card {entry.card_id} not found")

    def _put(self, user_id: str, entry: Entry) -> None:
        previous = self.entries.get(entry.entry_id)
        if previous is None:
            self._user_entries.setdefault(user_id, []).append(entry.entry_id)
        elif previous.group_id:
            self._group_entries[previous.group_id].remove(entry.entry_id)
        self.entries[entry.entry_id] = entry
        if entry.group_id:
            self._group_entries.setdefault(entry.group_id, []).append(entry.entry_id)

    def _remove(self, user_id: str, entry_id: str) -> None:
        entry = self.entries.pop(entry_id)
        self._user_entries[user_id].remove(entry_id)
        if entry.group_id:
            self._group_entries[entry.group_id].remove(entry_id)
