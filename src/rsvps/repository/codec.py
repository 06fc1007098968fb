"""CSV row encoding for RsvpRecord.

Booleans are written as `true`/`false` and timestamps as ISO-8601 with
microseconds and a UTC offset, which parses back to the identical value.
"""

import csv
import io
from collections.abc import Iterable
from dataclasses import fields
from datetime import datetime

from src.rsvps.dtos import RsvpRecord
from src.rsvps.errors import SerializationError

HEADER: tuple[str, ...] = tuple(f.name for f in fields(RsvpRecord))
HEADER_LINE = ",".join(HEADER)

BOOL_FIELDS = frozenset(
    {
        "attending",
        "attending_secondary",
        "attending_tertiary",
        "plus_one_attending",
    }
)
DATETIME_FIELDS = frozenset({"created_at", "updated_at"})

LINE_TERMINATOR = "\n"


def _encode_value(name: str, value) -> str:
    if name in BOOL_FIELDS:
        return "true" if value else "false"
    if name in DATETIME_FIELDS:
        if value.tzinfo is None:
            raise SerializationError(f"{name} must be timezone-aware, got {value!r}")
        return value.isoformat(timespec="microseconds")
    if not isinstance(value, str):
        raise SerializationError(f"{name} must be a string, got {type(value).__name__}")
    # csv.reader cannot read back longer fields
    limit = csv.field_size_limit()
    if len(value) > limit:
        raise SerializationError(f"{name} is longer than the {limit} character field limit")
    return value


def _decode_value(name: str, raw: str, line_number: int | None):
    if name in BOOL_FIELDS:
        if raw == "true":
            return True
        if raw == "false":
            return False
        raise SerializationError(f"invalid boolean for {name}: {raw!r}", line_number)
    if name in DATETIME_FIELDS:
        try:
            value = datetime.fromisoformat(raw)
        except ValueError as e:
            raise SerializationError(f"invalid timestamp for {name}: {raw!r}", line_number) from e
        if value.tzinfo is None:
            raise SerializationError(f"timestamp for {name} has no offset: {raw!r}", line_number)
        return value
    return raw


def encode_record(record: RsvpRecord) -> list[str]:
    return [_encode_value(name, getattr(record, name)) for name in HEADER]


def decode_row(row: list[str], line_number: int | None = None) -> RsvpRecord:
    if len(row) != len(HEADER):
        raise SerializationError(
            f"expected {len(HEADER)} columns, found {len(row)}", line_number
        )
    values = {name: _decode_value(name, raw, line_number) for name, raw in zip(HEADER, row)}
    return RsvpRecord(**values)


def is_header(row: list[str]) -> bool:
    return tuple(row) == HEADER


def encode_rows(records: Iterable[RsvpRecord], with_header: bool = False) -> str:
    """Encode records into CSV text without touching any file."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator=LINE_TERMINATOR)
    if with_header:
        writer.writerow(HEADER)
    for record in records:
        writer.writerow(encode_record(record))
    return buffer.getvalue()
