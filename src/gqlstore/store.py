"""In-process record store.

Records are plain dicts keyed by storage key, held in one dict keyed by
entity id. ``merge`` is the only write path: it unions fields into
existing records (incoming values win) and swaps the results in under a
lock, so a reader never sees half of one normalization result.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator
from collections.abc import Mapping
from threading import Lock
from types import MappingProxyType
from typing import Any

from gqlstore.records import Record
from gqlstore.records import RecordValue
from gqlstore.records import record_to_json

logger = logging.getLogger(__name__)


class RecordStore:
    """Mutable ``EntityId -> Record`` mapping owned by one environment."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._records: dict[str, Record] = {}

    # -- write --

    def merge(self, entity_map: Mapping[str, Mapping[str, RecordValue]]) -> set[str]:
        """Merge normalizer output and return the ids of touched entities.

        Fields absent from an incoming record are kept. Merging the same
        mapping twice leaves the store as merging it once.
        """
        with self._lock:
            updated = {
                entity_id: {**self._records.get(entity_id, {}), **incoming}
                for entity_id, incoming in entity_map.items()
            }
            self._records.update(updated)
        logger.info("merged records=%d total=%d", len(updated), len(self._records))
        return set(updated)

    # -- read --

    def get(self, entity_id: str) -> Mapping[str, RecordValue] | None:
        """Return a read-only view of the record for *entity_id*, if any."""
        record = self._records.get(entity_id)
        if record is None:
            return None
        return MappingProxyType(record)

    def entity_ids(self) -> list[str]:
        with self._lock:
            return list(self._records)

    def snapshot(self) -> dict[str, dict[str, Any]]:
        """JSON-compatible deep copy; references render as ``{"__ref": id}``."""
        with self._lock:
            return {
                entity_id: copy.deepcopy(record_to_json(record))
                for entity_id, record in self._records.items()
            }

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entity_ids())
