"""
Error taxonomy for parsing, validation, and persistence.

Every error is scoped to the operation that raised it; the API layer maps
each class to an HTTP status via ``status_code``.
"""
from __future__ import annotations

from typing import Any


class DataError(Exception):
    """Base class for all dataset errors."""

    status_code = 400
    code = "data_error"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message, "detail": self.detail}


class EmptyOrUnrecognizedFormat(DataError):
    """The input produced zero usable rows."""

    status_code = 422
    code = "empty_or_unrecognized_format"


class SchemaMismatch(DataError):
    """The dataset's key column is absent from the parsed headers."""

    status_code = 422
    code = "schema_mismatch"


class FileNameMismatch(DataError):
    """Structured upload named differently from the dataset's expected file."""

    status_code = 422
    code = "file_name_mismatch"


class InvalidRecord(DataError):
    """A single edit failed structural sanity checks (bad year, negative count)."""

    status_code = 422
    code = "invalid_record"


class UnknownDataset(DataError):
    status_code = 404
    code = "unknown_dataset"


class PersistenceFailure(DataError):
    """Durable-store read or write failed.

    Raised after the in-memory mutation was applied; the caller decides
    whether to retry.
    """

    status_code = 503
    code = "persistence_failure"
