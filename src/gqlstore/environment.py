"""Environment: network layer + normalizer + store + selector.

The environment owns one ``RecordStore`` and is its only writer.
Queries go out through the network layer; responses are normalized
against the query's own operation and merged. Reads parse a fragment
(or query) and run the selector against the store.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from collections.abc import Callable
from typing import Any

from graphql import FragmentDefinitionNode
from graphql import SelectionSetNode
from pydantic import ValidationError

from gqlstore.config import EnvironmentConfig
from gqlstore.document import FragmentTable
from gqlstore.document import parse_document
from gqlstore.errors import DocumentError
from gqlstore.errors import ResponseError
from gqlstore.network import NetworkLayer
from gqlstore.network import as_network_layer
from gqlstore.normalizer import normalize
from gqlstore.observability import timed
from gqlstore.records import QueryResponse
from gqlstore.selector import select
from gqlstore.store import RecordStore

logger = logging.getLogger(__name__)


class Environment:
    """Entry point for sending queries and reading fragments."""

    def __init__(
        self,
        network_layer: NetworkLayer | Callable[[str], Awaitable[dict[str, Any]]],
        *,
        store: RecordStore | None = None,
        config: EnvironmentConfig | None = None,
    ) -> None:
        self._network = as_network_layer(network_layer)
        self._store = store if store is not None else RecordStore()
        self._config = config or EnvironmentConfig()
        self._fragments: dict[str, FragmentDefinitionNode] = {}

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def root_id(self) -> str:
        return self._config.store.root_id

    # ------------------------------------------------------------------
    # Fragments
    # ------------------------------------------------------------------

    def register_fragments(self, source: str) -> list[str]:
        """Make the named fragments in *source* spreadable from any document.

        Returns the registered names. A later registration of the same
        name replaces the earlier one.
        """
        parsed = parse_document(source)
        own = list(parsed.fragments)
        if not own:
            raise DocumentError("Document defines no fragments")
        self._fragments.update(parsed.fragments)
        logger.info("registered fragments=%s", ",".join(own))
        return own

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def send_query(self, query: str) -> dict[str, Any]:
        """Execute *query*, merge its data into the store, return the raw response."""
        with timed("environment.send_query", enabled=self._config.record_latency):
            parsed = parse_document(query, extra_fragments=self._fragments)
            operation = parsed.operation()
            payload = await self._network.execute(query)
            data = self._extract_data(payload)
            self._commit(operation.selection_set, data, self.root_id, parsed.fragments)
        return payload

    def publish(self, query: str, response: dict[str, Any]) -> set[str]:
        """Merge an already obtained *response* to *query* into the store."""
        with timed("environment.publish", enabled=self._config.record_latency):
            parsed = parse_document(query, extra_fragments=self._fragments)
            operation = parsed.operation()
            data = self._extract_data(response)
            return self._commit(
                operation.selection_set, data, self.root_id, parsed.fragments
            )

    def write_fragment(
        self,
        entity_id: str,
        fragment_source: str,
        data: dict[str, Any],
        *,
        fragment_name: str | None = None,
    ) -> set[str]:
        """Normalize *data* shaped like a fragment and merge it under *entity_id*."""
        with timed("environment.write_fragment", enabled=self._config.record_latency):
            parsed = parse_document(fragment_source, extra_fragments=self._fragments)
            selection_set = parsed.primary_selection(fragment_name)
            return self._commit(selection_set, data, entity_id, parsed.fragments)

    def _commit(
        self,
        selection_set: SelectionSetNode,
        data: dict[str, Any],
        root_id: str,
        fragments: FragmentTable,
    ) -> set[str]:
        # Normalization finishes before the store is touched; any error
        # leaves the store as it was.
        records = normalize(
            selection_set,
            data,
            root_id,
            fragments,
            id_field=self._config.store.id_field,
        )
        return self._store.merge(records)

    @staticmethod
    def _extract_data(payload: Any) -> dict[str, Any]:
        try:
            response = QueryResponse.model_validate(payload)
        except ValidationError as exc:
            raise ResponseError(f"Malformed response payload: {exc}") from exc

        if response.data is None:
            errors = response.errors or []
            messages = [str(e.get("message", e)) for e in errors]
            raise ResponseError(
                f"Response carries no data: {'; '.join(messages) or 'empty payload'}",
                errors,
            )
        if response.errors:
            logger.warning(
                "response carried %d error(s) alongside data; merging data",
                len(response.errors),
            )
        return response.data

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read_fragment(
        self,
        entity_id: str,
        fragment_source: str,
        *,
        fragment_name: str | None = None,
    ) -> dict[str, Any]:
        """Read the fragment in *fragment_source* rooted at *entity_id*.

        Uses the fragment named *fragment_name*, or the first definition of
        the document. Spreads resolve against the document's own fragments
        first, then against registered ones.
        """
        with timed("environment.read_fragment", enabled=self._config.record_latency):
            parsed = parse_document(fragment_source, extra_fragments=self._fragments)
            selection_set = parsed.primary_selection(fragment_name)
            return select(self._store, entity_id, selection_set, parsed.fragments)

    select_data = read_fragment

    def read_query(
        self, query: str, *, operation_name: str | None = None
    ) -> dict[str, Any]:
        """Read a query's own selection from the root record."""
        with timed("environment.read_query", enabled=self._config.record_latency):
            parsed = parse_document(query, extra_fragments=self._fragments)
            operation = parsed.operation(operation_name)
            return select(
                self._store, self.root_id, operation.selection_set, parsed.fragments
            )
