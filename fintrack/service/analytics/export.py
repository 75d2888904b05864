"""
Export Encoders for filtered transaction sets.

Both encoders write the same fields in the same order:
Date, Category, Description, Amount, Type, ID.

An empty set is never encoded: the encoders return None so callers can
report that there is nothing to export.
"""

import csv
import io
import json
from typing import List, Optional, Sequence, Union

from fintrack.domain.entities import Transaction

from .models import ExportArtifact

EXPORT_FIELDS = ("Date", "Category", "Description", "Amount", "Type", "ID")

CSV_MEDIA_TYPE = "text/csv"
JSON_MEDIA_TYPE = "application/json"


def amount_value(amount: float) -> Union[int, float]:
    """Whole amounts are written without a trailing '.0'."""
    return int(amount) if float(amount).is_integer() else amount


def export_filename(label: str, extension: str) -> str:
    return f"expenses_{label}.{extension}"


def export_record(txn: Transaction) -> dict:
    """One exported row as an ordered mapping of field name to value."""
    return {
        "Date": txn.date.isoformat(),
        "Category": txn.category,
        "Description": txn.description,
        "Amount": amount_value(txn.amount),
        "Type": txn.type.value,
        "ID": txn.id,
    }


def encode_csv(
    transactions: Sequence[Transaction],
    label: str = "all",
) -> Optional[ExportArtifact]:
    """
    Encode transactions as CSV.

    The header row is plain; every data value is quoted, with embedded
    quotes doubled.

    Returns:
        The artifact, or None when there is nothing to export
    """
    if not transactions:
        return None

    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(EXPORT_FIELDS)

    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for txn in transactions:
        record = export_record(txn)
        writer.writerow(
            ["" if record[name] is None else str(record[name]) for name in EXPORT_FIELDS]
        )

    return ExportArtifact(
        filename=export_filename(label, "csv"),
        media_type=CSV_MEDIA_TYPE,
        content=buffer.getvalue().encode("utf-8"),
    )


def encode_json(
    transactions: Sequence[Transaction],
    label: str = "all",
) -> Optional[ExportArtifact]:
    """
    Encode transactions as a pretty-printed JSON array of objects.

    Returns:
        The artifact, or None when there is nothing to export
    """
    if not transactions:
        return None

    records: List[dict] = [export_record(txn) for txn in transactions]

    return ExportArtifact(
        filename=export_filename(label, "json"),
        media_type=JSON_MEDIA_TYPE,
        content=json.dumps(records, indent=2, ensure_ascii=False).encode("utf-8"),
    )
