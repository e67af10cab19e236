"""Data store for ledger entities."""

from ledger_cycles.store.ledger import LedgerDataStore

__all__ = ["LedgerDataStore"]
