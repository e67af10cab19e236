"""Write intents handed to the external store."""

from dataclasses import dataclass, field, replace
from typing import Any

from ledger_cycles.models.ledger.entry import Entry


@dataclass(frozen=True)
class EntryUpdate:
    """Field changes for one stored entry."""

    entry_id: str
    changes: dict[str, Any]

    def apply_to(self, entry: Entry) -> Entry:
        """Return a copy of ``entry`` with the changes written over it."""
        return replace(entry, **self.changes)


@dataclass
class LedgerBatch:
    """One logical set of writes that must be applied atomically."""

    creates: list[Entry] = field(default_factory=list)
    updates: list[EntryUpdate] = field(default_factory=list)
    deletes: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.creates or self.updates or self.deletes)

    def __len__(self) -> int:
        return len(self.creates) + len(self.updates) + len(self.deletes)
