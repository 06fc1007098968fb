from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.rsvps.dtos import AddParams, RsvpRecord


class RecordStoreError(Exception):
    """Base class for everything the record store raises."""


class StoreIOError(RecordStoreError):
    """Raised when reading, writing, seeking or truncating the file fails."""

    def __init__(self, operation: str, error: OSError) -> None:
        self.operation = operation
        self.error = error
        super().__init__(f"I/O error during {operation}: {error}")


class SerializationError(RecordStoreError):
    """Raised when a row cannot be encoded or decoded."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class DuplicateKeyError(RecordStoreError):
    """Raised when inserting a name that is already stored."""

    def __init__(self, params: "AddParams", existing: "RsvpRecord") -> None:
        self.params = params
        self.existing = existing
        super().__init__(f"A record named '{existing.name}' already exists")


class UpdateKeyMismatchError(RecordStoreError):
    """Raised when an update is applied to a record with a different name.

    The store always locates the record by name before merging, so this
    signals a bug rather than a missing record.
    """

    def __init__(self, record_name: str, params_name: str) -> None:
        self.record_name = record_name
        self.params_name = params_name
        super().__init__(
            f"Cannot update record '{record_name}' with parameters for '{params_name}'"
        )
