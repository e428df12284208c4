"""Exceptions raised by sales operations and translated by the API layer."""

from __future__ import annotations


class PreconditionError(ValueError):
    """A user action was rejected before any state changed."""


class SnapshotImportError(ValueError):
    """An imported depot document is structurally invalid."""


class RecordNotFoundError(LookupError):
    """No record with the given id exists in the depot."""

    def __init__(self, depot: str, record_id: str) -> None:
        super().__init__(f"Record '{record_id}' not found in depot '{depot}'")
        self.depot = depot
        self.record_id = record_id
