"""
Recipient ingest: strict CSV / JSON parsing into Recipient records.
"""

from .recipients import (
    parse_csv_text,
    parse_json_data,
    parse_csv,
    parse_json,
    load_recipients,
    dump_recipients_csv,
)

__all__ = [
    "parse_csv_text",
    "parse_json_data",
    "parse_csv",
    "parse_json",
    "load_recipients",
    "dump_recipients_csv",
]
