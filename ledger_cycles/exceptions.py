"""Custom exception hierarchy for ledger-cycles."""


class LedgerError(Exception):
    """Base exception for all ledger-cycles errors."""


class EntityNotFoundError(LedgerError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a card reference is violated on write."""


class InvalidEntityStateError(LedgerError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""


class MalformedDateError(LedgerError):
    """Raised when a date value cannot be parsed."""
