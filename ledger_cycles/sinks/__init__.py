"""Output sinks and serialization for ledger records."""

from ledger_cycles.sinks.json_file import JsonFileSink
from ledger_cycles.sinks.serialization import (
    card_from_dict,
    entry_from_dict,
    invoice_to_dict,
    serialize_value,
    to_dict,
)

__all__ = [
    "JsonFileSink",
    "card_from_dict",
    "entry_from_dict",
    "invoice_to_dict",
    "serialize_value",
    "to_dict",
]
