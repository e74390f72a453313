"""Error taxonomy for normalization, selection and document handling.

Normalization-time errors abort the whole merge for one response.
Selection-time cache misses (``CacheMissError``) ask the caller to
refetch; ``DanglingReferenceError`` means the store itself is corrupt.
"""

from __future__ import annotations

from collections.abc import Sequence


class GqlStoreError(Exception):
    """Base class for every error raised by ``gqlstore``."""

    def __init__(
        self,
        message: str,
        *,
        entity_id: str | None = None,
        storage_key: str | None = None,
        field_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.entity_id = entity_id
        self.storage_key = storage_key
        self.field_name = field_name


# ---------------------------------------------------------------------------
# Document / parsing
# ---------------------------------------------------------------------------


class DocumentError(GqlStoreError):
    """Raised when a GraphQL document cannot be parsed or is unusable."""


class UnknownFragmentError(GqlStoreError):
    """Raised when a fragment spread names a fragment that is not defined."""

    def __init__(self, fragment_name: str, *, entity_id: str | None = None) -> None:
        super().__init__(
            f"Unknown fragment {fragment_name!r}",
            entity_id=entity_id,
        )
        self.fragment_name = fragment_name


class FragmentCycleError(GqlStoreError):
    """Raised when fragment spreads form a cycle."""

    def __init__(self, cycle: Sequence[str], *, entity_id: str | None = None) -> None:
        path = " -> ".join(cycle)
        super().__init__(f"Fragment spread cycle: {path}", entity_id=entity_id)
        self.cycle = tuple(cycle)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


class UnsupportedArgumentError(GqlStoreError):
    """Raised for argument values that are not scalar literals."""

    def __init__(
        self,
        field_name: str,
        argument_name: str,
        kind: str,
    ) -> None:
        super().__init__(
            f"Unsupported argument {argument_name!r} on field {field_name!r}: "
            f"{kind} values cannot be encoded in a storage key",
            field_name=field_name,
        )
        self.argument_name = argument_name
        self.kind = kind


class UnsupportedShapeError(GqlStoreError):
    """Raised when a response or stored value has a shape the store cannot handle."""


class UnidentifiableEntityError(GqlStoreError):
    """Raised when a linked object in a response carries no identity field."""


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class CacheMissError(GqlStoreError):
    """The store does not hold enough data; refetch and retry."""


class EntityNotFoundError(CacheMissError):
    """Raised when the requested root entity is not in the store."""

    def __init__(self, entity_id: str) -> None:
        super().__init__(f"Entity {entity_id!r} not found", entity_id=entity_id)


class MissingFieldError(CacheMissError):
    """Raised when a record lacks a selected field."""

    def __init__(self, entity_id: str, storage_key: str, field_name: str) -> None:
        super().__init__(
            f"Field {field_name!r} (storage key {storage_key!r}) "
            f"missing on entity {entity_id!r}",
            entity_id=entity_id,
            storage_key=storage_key,
            field_name=field_name,
        )


class DanglingReferenceError(GqlStoreError):
    """Raised when a reference points at an entity absent from the store."""

    def __init__(self, entity_id: str, storage_key: str, target_id: str) -> None:
        super().__init__(
            f"Reference {storage_key!r} on entity {entity_id!r} points at "
            f"missing entity {target_id!r}",
            entity_id=entity_id,
            storage_key=storage_key,
        )
        self.target_id = target_id


# ---------------------------------------------------------------------------
# Network / response envelope
# ---------------------------------------------------------------------------


class NetworkError(GqlStoreError):
    """Raised by network layers when a call fails."""


class ResponseError(GqlStoreError):
    """Raised when a response payload carries no usable ``data``."""

    def __init__(self, message: str, errors: Sequence[dict] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])
