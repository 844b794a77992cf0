"""Failures raised by the entity store.

Each error carries a ``kind`` so the transport layer can tell them apart
without inspecting messages.
"""

from typing import Optional


class StoreError(Exception):
    kind = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StoreError):
    kind = "not_found"


class ConflictError(StoreError):
    kind = "conflict"


class ReferentialError(StoreError):
    kind = "referential"


class InternalError(StoreError):
    kind = "internal"


class PartialBlockError(StoreError):
    """A pause failed while adding a block; earlier rows stay persisted."""

    def __init__(self, cause: StoreError, block_id: int, created_pause_ids: Optional[list] = None):
        super().__init__(f"block {block_id} created but adding pauses failed: {cause.message}")
        self.kind = cause.kind
        self.cause = cause
        self.block_id = block_id
        self.created_pause_ids = list(created_pause_ids or [])


__all__ = [
    "StoreError",
    "NotFoundError",
    "ConflictError",
    "ReferentialError",
    "InternalError",
    "PartialBlockError",
]
