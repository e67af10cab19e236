"""Enumeration types for ledger entities."""

from enum import Enum


class EntryKind(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    CARD_EXPENSE = "CARD_EXPENSE"


class EntryStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class AmountMode(str, Enum):
    """How the template amount of an installment purchase is read."""

    TOTAL = "TOTAL"
    PER_INSTALLMENT = "PER_INSTALLMENT"


class RoundingPolicy(str, Enum):
    """What happens to the cent residual of a TOTAL split."""

    INDEPENDENT = "INDEPENDENT"
    LAST_ABSORBS = "LAST_ABSORBS"


class SortField(str, Enum):
    DATE = "date"
    AMOUNT = "amount"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
