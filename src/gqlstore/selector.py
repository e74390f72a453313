"""Selector: rebuild a response-shaped result from normalized records."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from graphql import SelectionSetNode

from gqlstore.document import FragmentTable
from gqlstore.document import SpreadPath
from gqlstore.document import collect_fields
from gqlstore.document import response_key
from gqlstore.errors import DanglingReferenceError
from gqlstore.errors import EntityNotFoundError
from gqlstore.errors import MissingFieldError
from gqlstore.errors import UnsupportedShapeError
from gqlstore.records import RecordValue
from gqlstore.records import Reference
from gqlstore.storage_key import storage_key_for
from gqlstore.store import RecordStore

logger = logging.getLogger(__name__)

_PRIMITIVES = (str, int, float, bool, type(None))


def select(
    store: RecordStore,
    root_id: str,
    selection_set: SelectionSetNode,
    fragments: FragmentTable | None = None,
) -> dict[str, Any]:
    """Read *selection_set* starting at the record for *root_id*.

    Raises ``EntityNotFoundError`` or ``MissingFieldError`` when the
    store does not hold enough data, and ``DanglingReferenceError`` when
    a reference points at a record that does not exist.
    """
    record = store.get(root_id)
    if record is None:
        raise EntityNotFoundError(root_id)
    result = _select_record(
        store, root_id, record, selection_set, fragments or {}, path=()
    )
    logger.debug("selected root=%s fields=%d", root_id, len(result))
    return result


def _select_record(
    store: RecordStore,
    entity_id: str,
    record: Mapping[str, RecordValue],
    selection_set: SelectionSetNode,
    fragments: FragmentTable,
    *,
    path: SpreadPath,
) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for field_node, field_path in collect_fields(
        selection_set, fragments, path=path, entity_id=entity_id
    ):
        key = response_key(field_node)
        storage_key = storage_key_for(field_node)
        if storage_key not in record:
            raise MissingFieldError(entity_id, storage_key, key)
        value = record[storage_key]

        if isinstance(value, Reference):
            if field_node.selection_set is None:
                raise UnsupportedShapeError(
                    f"Field {key!r} on entity {entity_id!r} holds a reference "
                    "but was selected without a selection set",
                    entity_id=entity_id,
                    storage_key=storage_key,
                    field_name=key,
                )
            child = store.get(value.entity_id)
            if child is None:
                raise DanglingReferenceError(entity_id, storage_key, value.entity_id)
            data[key] = _select_record(
                store,
                value.entity_id,
                child,
                field_node.selection_set,
                fragments,
                path=field_path,
            )
        elif field_node.selection_set is not None and value is not None:
            raise UnsupportedShapeError(
                f"Field {key!r} on entity {entity_id!r} holds a scalar "
                "but was selected with a selection set",
                entity_id=entity_id,
                storage_key=storage_key,
                field_name=key,
            )
        elif isinstance(value, _PRIMITIVES):
            data[key] = value
        else:
            data[key] = copy.deepcopy(value)
    return data
