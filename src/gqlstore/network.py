"""Network layer abstraction and a deterministic in-memory implementation."""

from __future__ import annotations

import copy
import inspect
import re
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Mapping
from typing import Any
from typing import Protocol
from typing import runtime_checkable

from gqlstore.errors import NetworkError

_WHITESPACE_RE = re.compile(r"[\s,]+")


@runtime_checkable
class NetworkLayer(Protocol):
    """Protocol for anything that can execute a query and return a payload.

    The payload is the ``{"data": ..., "errors": ...}`` envelope. Transport,
    authentication and retries are the layer's business.
    """

    async def execute(self, query: str) -> dict[str, Any]: ...


def _query_key(query: str) -> str:
    # Commas are insignificant in GraphQL, like whitespace.
    return _WHITESPACE_RE.sub(" ", query).strip()


class StaticNetworkLayer(NetworkLayer):
    """Returns canned responses keyed by query text.

    Whitespace differences between the registered and the executed query
    are ignored. Unknown queries raise ``NetworkError``.
    """

    def __init__(self, responses: Mapping[str, dict[str, Any]] | None = None) -> None:
        self._responses: dict[str, dict[str, Any]] = {}
        self.calls: list[str] = []
        for query, response in (responses or {}).items():
            self.add(query, response)

    def add(self, query: str, response: dict[str, Any]) -> None:
        self._responses[_query_key(query)] = response

    async def execute(self, query: str) -> dict[str, Any]:
        self.calls.append(query)
        response = self._responses.get(_query_key(query))
        if response is None:
            raise NetworkError("No response registered for query")
        return copy.deepcopy(response)


class CallableNetworkLayer(NetworkLayer):
    """Adapts a plain ``async def fetch(query) -> dict`` function."""

    def __init__(self, fetch: Callable[[str], Awaitable[dict[str, Any]]]) -> None:
        self._fetch = fetch

    async def execute(self, query: str) -> dict[str, Any]:
        result = self._fetch(query)
        if not inspect.isawaitable(result):
            raise NetworkError(
                f"Network layer {self._fetch!r} returned {type(result).__name__}, "
                "not an awaitable"
            )
        return await result


def as_network_layer(
    layer: NetworkLayer | Callable[[str], Awaitable[dict[str, Any]]],
) -> NetworkLayer:
    """Accept either a ``NetworkLayer`` or a bare async callable."""
    if isinstance(layer, NetworkLayer):
        return layer
    if callable(layer):
        return CallableNetworkLayer(layer)
    raise TypeError(f"Not a network layer: {layer!r}")
