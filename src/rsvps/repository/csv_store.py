"""Record store backed by a single CSV file.

The store owns one read/write file handle and positions it explicitly for
every operation: reads start from the beginning of the file, appends go to
the end, and removals truncate and rewrite the whole file. Every public
method holds the store lock, so the shared cursor is never used by two
callers at once.

Removal is an O(n) rewrite. Guest lists are small; swapping in an indexed
or append-only backend only needs another RecordStore implementation.
"""

import csv
import io
import logging
import os
import tempfile
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager, suppress
from datetime import UTC, datetime
from pathlib import Path
from typing import TextIO

from src.rsvps.dtos import AddParams, Attendance, RsvpParams, RsvpRecord, normalize_name
from src.rsvps.errors import DuplicateKeyError, SerializationError, StoreIOError
from src.rsvps.repository.codec import HEADER_LINE, decode_row, encode_rows, is_header
from src.rsvps.repository.store import RecordStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


@contextmanager
def _io(operation: str) -> Iterator[None]:
    try:
        yield
    except OSError as e:
        raise StoreIOError(operation, e) from e


class CsvRecordStore(RecordStore):
    """RecordStore over one open CSV file."""

    def __init__(self, file: TextIO, clock: Clock = utc_now) -> None:
        self._file = file
        self._clock = clock
        self._lock = threading.RLock()

    @classmethod
    def open(cls, path: str | Path, clock: Clock = utc_now) -> "CsvRecordStore":
        """Open (creating if needed) the CSV file at path for reading and writing."""
        path = Path(path)
        with _io("open"):
            path.touch(exist_ok=True)
            file = path.open("r+", encoding="utf-8", newline="")
        return cls(file, clock=clock)

    @classmethod
    def temporary(cls, clock: Clock = utc_now) -> "CsvRecordStore":
        """Store over an anonymous temporary file, header already written."""
        with _io("open"):
            file = tempfile.TemporaryFile("w+", encoding="utf-8", newline="")
        store = cls(file, clock=clock)
        store.add_header()
        return store

    def close(self) -> None:
        with self._lock:
            self._file.close()

    def __enter__(self) -> "CsvRecordStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # =========================================================================
    # File positioning
    # =========================================================================

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with self._lock:
            try:
                yield
            except Exception:
                # Leave the cursor ready for the next append; the original error is re-raised.
                with suppress(OSError, ValueError):
                    self._file.seek(0, os.SEEK_END)
                raise

    def _seek_end(self) -> int:
        with _io("seek"):
            return self._file.seek(0, os.SEEK_END)

    def _sync(self) -> None:
        with _io("flush"):
            self._file.flush()
            os.fsync(self._file.fileno())

    def _read_text(self) -> str:
        """Whole file as text. Leaves the cursor at end of file."""
        with _io("seek"):
            self._file.seek(0)
        with _io("read"):
            try:
                return self._file.read()
            except UnicodeDecodeError as e:
                # Decoding runs in chunks, so there is no reliable line number here
                raise SerializationError(f"file is not valid UTF-8: {e.reason}") from e

    @staticmethod
    def _parse(text: str) -> list[RsvpRecord]:
        """
        Decode every row of text.
        A malformed row aborts the whole read.
        """
        reader = csv.reader(io.StringIO(text, newline=""))
        records = []
        try:
            for row in reader:
                if not row:
                    continue
                if reader.line_num == 1 and is_header(row):
                    continue
                records.append(decode_row(row, reader.line_num))
        except csv.Error as e:
            raise SerializationError(str(e), reader.line_num) from e
        return records

    def _read_all(self) -> list[RsvpRecord]:
        return self._parse(self._read_text())

    def _append(self, records: list[RsvpRecord], current: str) -> None:
        """Append records after current, the file contents as last read."""
        text = encode_rows(records)
        if not current:
            # An empty file gets its header before the first row
            text = encode_rows([], with_header=True) + text
        elif not current.endswith("\n"):
            # Hand-edited files may lack the final line break
            text = "\n" + text
        self._seek_end()
        with _io("write"):
            self._file.write(text)
        self._sync()

    def _rewrite(self, records: list[RsvpRecord]) -> None:
        text = encode_rows(records, with_header=True)
        with _io("truncate"):
            self._file.truncate(0)
            self._file.seek(0)
            self._file.write(text)
        self._sync()

    @staticmethod
    def _find_by_key(records: list[RsvpRecord], key: str) -> RsvpRecord | None:
        return next((record for record in records if record.key == key), None)

    # =========================================================================
    # Operations
    # =========================================================================

    def insert(self, params: AddParams, now: datetime | None = None) -> RsvpRecord:
        with self._locked():
            now = now if now is not None else self._clock()
            current = self._read_text()
            existing = self._find_by_key(self._parse(current), normalize_name(params.name))
            if existing is not None:
                self._seek_end()
                logger.warning("Attempted to add %r, but %r exists already", params, existing)
                raise DuplicateKeyError(params, existing)

            record = RsvpRecord.from_add(params, now)
            self._append([record], current)
            return record

    def upsert(self, params: RsvpParams, now: datetime | None = None) -> RsvpRecord:
        with self._locked():
            now = now if now is not None else self._clock()
            current = self._read_text()
            records = self._parse(current)
            key = normalize_name(params.name)
            previous = self._find_by_key(records, key)

            if previous is None:
                record = RsvpRecord.from_rsvp(params, now)
                self._append([record], current)
                return record

            # Merge before touching the file so a failed merge mutates nothing
            record = previous.updated_with(params, now)
            survivors = [r for r in records if r.key != key]
            self._rewrite(survivors + [record])
            return record

    def remove(self, name: str) -> RsvpRecord | None:
        with self._locked():
            records = self._read_all()
            key = normalize_name(name)
            removed = self._find_by_key(records, key)
            if removed is None:
                self._seek_end()
                return None

            self._rewrite([r for r in records if r.key != key])
            logger.info("Removed record %r", removed.name)
            return removed

    def get(self, query: str) -> RsvpRecord | None:
        with self._locked():
            names = {normalize_name(part) for part in query.split("&")}
            names.discard("")
            records = self._read_all()
            if not names:
                return None

            # Primary names take precedence over plus-one aliases
            for record in records:
                if record.key in names:
                    return record
            for record in records:
                if record.alias in names:
                    return record
            return None

    def list_all(self) -> list[RsvpRecord]:
        with self._locked():
            return self._read_all()

    def aggregate(self) -> Attendance:
        with self._locked():
            attendance = Attendance()
            for record in self._read_all():
                attendance.add(record)
            return attendance

    def dump(self) -> str:
        with self._locked():
            return self._read_text()

    def add_header(self) -> None:
        """Write the header row into an empty file. No-op otherwise."""
        with self._locked():
            if self._seek_end() != 0:
                return
            with _io("write"):
                self._file.write(HEADER_LINE + "\n")
            self._sync()
