"""Ledger domain models."""

from ledger_cycles.models.ledger.batch import EntryUpdate, LedgerBatch
from ledger_cycles.models.ledger.card import Card
from ledger_cycles.models.ledger.entry import Entry, InstallmentLink
from ledger_cycles.models.ledger.enums import (
    AmountMode,
    EntryKind,
    EntryStatus,
    RoundingPolicy,
    SortField,
    SortOrder,
)
from ledger_cycles.models.ledger.invoice import VirtualInvoice

__all__ = [
    "AmountMode",
    "Card",
    "Entry",
    "EntryKind",
    "EntryStatus",
    "EntryUpdate",
    "InstallmentLink",
    "LedgerBatch",
    "RoundingPolicy",
    "SortField",
    "SortOrder",
    "VirtualInvoice",
]
