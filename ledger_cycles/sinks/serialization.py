"""Conversion of ledger records to and from plain dicts."""

from dataclasses import asdict, fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from ledger_cycles.cycles import NOON, normalize_date
from ledger_cycles.models.ledger import (
    Card,
    Entry,
    EntryKind,
    EntryStatus,
    InstallmentLink,
    VirtualInvoice,
)


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization."""
    result = {}
    for key, value in asdict(obj).items():
        result[key] = serialize_value(value)
    return result


def to_dict_fast(obj: Any) -> dict:
    """Convert a flat dataclass without the deep copy ``asdict`` makes.

    Nested dataclass fields (such as ``Entry.installment``) are left to
    :func:`serialize_value`, which converts them recursively.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return to_dict_fast(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def entry_from_dict(data: dict[str, Any], normalized_hour: int = NOON) -> Entry:
    """Rebuild an entry from its stored form.

    The date is re-parsed and pinned to ``normalized_hour`` so a record
    written in one timezone keeps its calendar day when read in another.
    """
    link = data.get("installment")
    return Entry(
        entry_id=str(data["entry_id"]),
        description=data.get("description", ""),
        amount=Decimal(str(data["amount"])),
        date=normalize_date(data["date"], normalized_hour),
        kind=EntryKind(data["kind"]),
        category=data.get("category", ""),
        status=EntryStatus(data.get("status", EntryStatus.PENDING.value)),
        card_id=data.get("card_id"),
        installment=InstallmentLink(
            group_id=str(link["group_id"]),
            position=int(link["position"]),
            count=int(link["count"]),
        )
        if link
        else None,
    )


def card_from_dict(data: dict[str, Any]) -> Card:
    """Rebuild a card from its stored form."""
    return Card(
        card_id=str(data["card_id"]),
        name=data.get("name", ""),
        credit_limit=Decimal(str(data.get("credit_limit", "0"))),
        closing_day=int(data["closing_day"]),
        due_day=int(data["due_day"]),
        color=data.get("color", "slate"),
    )


def invoice_to_dict(invoice: VirtualInvoice) -> dict[str, Any]:
    """Export a derived invoice for display or download.

    Invoices are never read back into the ledger; they are rebuilt from
    entries by :func:`~ledger_cycles.aggregation.aggregate`.
    """
    return {
        "invoice_id": invoice.invoice_id,
        "card_id": invoice.card_id,
        "description": invoice.description,
        "month": invoice.month,
        "year": invoice.year,
        "total": str(invoice.total),
        "due_date": invoice.due_date.isoformat(),
        "status": invoice.status.value,
        "entry_ids": list(invoice.entry_ids),
    }
