"""Normalizer: flatten a response tree into identity-keyed records.

The walk follows the selection set and the response object side by
side. Linked objects become ``Reference`` values and get their own
record keyed by their ``id``. Nothing here touches a store; the caller
merges the returned mapping once the whole walk has succeeded.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from graphql import SelectionSetNode

from gqlstore.config import ROOT_ID
from gqlstore.document import FragmentTable
from gqlstore.document import SpreadPath
from gqlstore.document import collect_fields
from gqlstore.document import response_key
from gqlstore.errors import UnidentifiableEntityError
from gqlstore.errors import UnsupportedShapeError
from gqlstore.records import Record
from gqlstore.records import RecordMap
from gqlstore.records import Reference
from gqlstore.storage_key import storage_key_for

logger = logging.getLogger(__name__)

_PRIMITIVES = (str, int, float, bool, type(None))


def entity_id_of(
    obj: dict[str, Any],
    *,
    id_field: str = "id",
    parent_id: str | None = None,
    storage_key: str | None = None,
) -> str:
    """Return the identity of a linked response object."""
    value = obj.get(id_field)
    if isinstance(value, str) and value:
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise UnidentifiableEntityError(
        f"Linked object under {storage_key!r} on entity {parent_id!r} "
        f"has no usable {id_field!r} field",
        entity_id=parent_id,
        storage_key=storage_key,
        field_name=id_field,
    )


def normalize(
    selection_set: SelectionSetNode,
    data: dict[str, Any],
    root_id: str = ROOT_ID,
    fragments: FragmentTable | None = None,
    *,
    id_field: str = "id",
) -> RecordMap:
    """Flatten *data* into an ``EntityId -> Record`` mapping.

    The object at the top of *data* is stored under *root_id*. Raises
    ``UnidentifiableEntityError``, ``UnsupportedShapeError``,
    ``UnsupportedArgumentError`` or ``FragmentCycleError``; no partial
    result is ever returned.
    """
    records: RecordMap = {}
    _normalize_object(
        selection_set,
        data,
        root_id,
        records,
        fragments or {},
        id_field=id_field,
        path=(),
    )
    logger.debug("normalized root=%s records=%d", root_id, len(records))
    return records


def _normalize_object(
    selection_set: SelectionSetNode,
    data: dict[str, Any],
    entity_id: str,
    records: RecordMap,
    fragments: FragmentTable,
    *,
    id_field: str,
    path: SpreadPath,
) -> None:
    # One entity can be reached several times in a single response.
    record: Record = records.setdefault(entity_id, {})

    for field_node, field_path in collect_fields(
        selection_set, fragments, path=path, entity_id=entity_id
    ):
        key = response_key(field_node)
        storage_key = storage_key_for(field_node)
        if key not in data:
            logger.debug(
                "field %s absent from response for entity %s; skipped",
                key,
                entity_id,
            )
            continue
        value = data[key]

        if field_node.selection_set is None:
            record[storage_key] = (
                value if isinstance(value, _PRIMITIVES) else copy.deepcopy(value)
            )
            continue

        if value is None:
            record[storage_key] = None
            continue
        if isinstance(value, list):
            raise UnsupportedShapeError(
                f"List value under {storage_key!r} on entity {entity_id!r} "
                "is not supported",
                entity_id=entity_id,
                storage_key=storage_key,
                field_name=key,
            )
        if not isinstance(value, dict):
            raise UnsupportedShapeError(
                f"Expected an object under {storage_key!r} on entity "
                f"{entity_id!r}, got {type(value).__name__}",
                entity_id=entity_id,
                storage_key=storage_key,
                field_name=key,
            )

        child_id = entity_id_of(
            value,
            id_field=id_field,
            parent_id=entity_id,
            storage_key=storage_key,
        )
        record[storage_key] = Reference(child_id)
        _normalize_object(
            field_node.selection_set,
            value,
            child_id,
            records,
            fragments,
            id_field=id_field,
            path=field_path,
        )
