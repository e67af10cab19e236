"""Domain models for the ledger engine."""

from ledger_cycles.models.base import Cycle, CycleBounds

__all__ = ["Cycle", "CycleBounds"]
