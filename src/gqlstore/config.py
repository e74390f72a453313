"""Store and environment configuration dataclasses.

Frozen dataclasses with sensible defaults for each subsystem.
No env-var loading or YAML parsing — just plain defaults that can
be overridden at construction time.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field

ROOT_ID = "client:root"


@dataclass(frozen=True)
class StoreConfig:
    """Identity settings shared by the normalizer and the selector."""

    root_id: str = ROOT_ID
    id_field: str = "id"


@dataclass(frozen=True)
class EnvironmentConfig:
    """Settings for an ``Environment`` instance."""

    store: StoreConfig = field(default_factory=StoreConfig)
    record_latency: bool = True
