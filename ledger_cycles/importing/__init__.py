"""Import of externally parsed card statements."""

from ledger_cycles.importing.statement import (
    INVALID_AMOUNT,
    INVALID_DATE,
    OUT_OF_CYCLE,
    ImportResult,
    RejectedCandidate,
    StatementCandidate,
    StatementImporter,
)

__all__ = [
    "INVALID_AMOUNT",
    "INVALID_DATE",
    "OUT_OF_CYCLE",
    "ImportResult",
    "RejectedCandidate",
    "StatementCandidate",
    "StatementImporter",
]
