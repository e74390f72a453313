"""Root conftest — suite markers and shared query/response fixtures."""

from __future__ import annotations

import copy
from pathlib import Path

import pytest

from gqlstore import Environment
from gqlstore import StaticNetworkLayer
from gqlstore.observability import reset_latency_metrics

from tests.fixtures import PERSON_QUERY
from tests.fixtures import PERSON_RESPONSE


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Attach suite markers from test path.

    - `tests/unit/*` -> `unit`
    - `tests/integration/*` -> `integration`
    """
    root = Path(__file__).resolve().parents[1]
    for item in items:
        item_path = Path(str(item.fspath)).resolve()
        try:
            rel = item_path.relative_to(root)
        except ValueError:
            continue

        parts = rel.parts
        if len(parts) < 2 or parts[0] != "tests":
            continue
        if parts[1] == "unit":
            item.add_marker(pytest.mark.unit)
        elif parts[1] == "integration":
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def clean_latency_metrics():
    """Reset in-process latency aggregates between tests."""
    reset_latency_metrics()
    yield
    reset_latency_metrics()


@pytest.fixture()
def person_response() -> dict:
    return copy.deepcopy(PERSON_RESPONSE)


@pytest.fixture()
def network() -> StaticNetworkLayer:
    """Static network layer that knows the person query."""
    return StaticNetworkLayer({PERSON_QUERY: PERSON_RESPONSE})


@pytest.fixture()
def env(network) -> Environment:
    return Environment(network)
