"""
Recipient Ingest

Parses recipient files into validated Recipient records.

Supported formats:
- CSV with a header containing address, tokenId (or token_id) and amount
  (case-insensitive, extra columns ignored)
- JSON array of objects with address/Address, tokenId/token_id/TokenId
  and amount/Amount keys

Every row is validated; the first bad row aborts the load with a
RecipientParseError naming it. Rows are never skipped silently.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from core.schemas.errors import RecipientParseError
from core.schemas.recipient import Recipient


logger = logging.getLogger(__name__)

_TOKEN_ID_COLUMNS = ("tokenid", "token_id")


def _validate_row(data: dict[str, Any], row: int, source: str) -> Recipient:
    try:
        return Recipient.model_validate(data)
    except ValidationError as e:
        messages = "; ".join(err.get("msg", "") for err in e.errors())
        raise RecipientParseError(
            f"{source} row {row}: {messages}",
            row=row,
            source=source,
        ) from e


def parse_csv_text(text: str, source: str = "<csv>") -> list[Recipient]:
    """Parse CSV content into recipients."""
    reader = csv.reader(line for line in text.splitlines() if line.strip())
    try:
        header = next(reader)
    except StopIteration:
        raise RecipientParseError(f"{source} is empty", source=source) from None

    columns = [h.strip().lower() for h in header]
    try:
        address_col = columns.index("address")
        amount_col = columns.index("amount")
        token_col = next(columns.index(c) for c in _TOKEN_ID_COLUMNS if c in columns)
    except (ValueError, StopIteration):
        raise RecipientParseError(
            "CSV must contain columns: address, tokenId (or token_id), amount",
            source=source,
            details={"header": header},
        ) from None

    recipients: list[Recipient] = []
    # Row numbers are 1-based and count the header as row 1
    for row_number, values in enumerate(reader, start=2):
        width = max(address_col, amount_col, token_col) + 1
        if len(values) < width:
            raise RecipientParseError(
                f"{source} row {row_number}: expected at least {width} columns, got {len(values)}",
                row=row_number,
                source=source,
            )
        recipients.append(
            _validate_row(
                {
                    "address": values[address_col].strip(),
                    "token_id": values[token_col].strip(),
                    "amount": values[amount_col].strip(),
                },
                row_number,
                source,
            )
        )
    return recipients


def parse_json_data(data: Any, source: str = "<json>") -> list[Recipient]:
    """Validate already-decoded JSON data into recipients."""
    if not isinstance(data, list):
        raise RecipientParseError(
            "JSON input must contain an array of recipients",
            source=source,
        )

    recipients: list[Recipient] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise RecipientParseError(
                f"{source} row {index}: expected an object, got {type(item).__name__}",
                row=index,
                source=source,
            )
        recipients.append(_validate_row(item, index, source))
    return recipients


def parse_csv(path: str | Path) -> list[Recipient]:
    """Parse a CSV recipients file."""
    path = Path(path)
    return parse_csv_text(path.read_text(encoding="utf-8-sig"), source=str(path))


def parse_json(path: str | Path) -> list[Recipient]:
    """Parse a JSON recipients file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except json.JSONDecodeError as e:
        raise RecipientParseError(f"Invalid JSON in {path}: {e}", source=str(path)) from e
    return parse_json_data(data, source=str(path))


def load_recipients(path: str | Path) -> list[Recipient]:
    """
    Load recipients from a CSV or JSON file, chosen by extension.

    Raises:
        FileNotFoundError: If the file does not exist
        RecipientParseError: If the format is unsupported or any row is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Recipients file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        recipients = parse_csv(path)
    elif suffix == ".json":
        recipients = parse_json(path)
    else:
        raise RecipientParseError(
            f"Unsupported file format '{suffix}'. Use CSV or JSON.",
            source=str(path),
        )

    logger.info(f"Loaded {len(recipients)} recipients from {path}")
    return recipients


def dump_recipients_csv(recipients: Iterable[Recipient], path: str | Path) -> Path:
    """Write recipients as a CSV file readable by parse_csv."""
    path = Path(path)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["address", "tokenId", "amount"])
        for r in recipients:
            writer.writerow([r.address, r.token_id, r.amount])
    return path


__all__ = [
    "parse_csv_text",
    "parse_json_data",
    "parse_csv",
    "parse_json",
    "load_recipients",
    "dump_recipients_csv",
]
