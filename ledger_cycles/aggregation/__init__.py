"""Month aggregation: virtual invoices and overview totals."""

from ledger_cycles.aggregation.invoices import aggregate, belongs_to_invoice, invoice_members
from ledger_cycles.aggregation.summary import (
    MonthFilter,
    MonthSummary,
    card_usage,
    entries_in_month,
    list_month,
    summarize_month,
)

__all__ = [
    "MonthFilter",
    "MonthSummary",
    "aggregate",
    "belongs_to_invoice",
    "card_usage",
    "entries_in_month",
    "invoice_members",
    "list_month",
    "summarize_month",
]
