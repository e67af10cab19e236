"""Series and invoice mutations producing store write intents."""

from ledger_cycles.mutations.series import (
    EDITABLE_FIELDS,
    delete_forward,
    series_members,
    update_forward,
)
from ledger_cycles.mutations.status import next_status, status_updates, toggle_invoice_status

__all__ = [
    "EDITABLE_FIELDS",
    "delete_forward",
    "next_status",
    "series_members",
    "status_updates",
    "toggle_invoice_status",
    "update_forward",
]
