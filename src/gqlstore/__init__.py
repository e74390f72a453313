"""Normalized record store for GraphQL query results."""

from gqlstore.config import EnvironmentConfig
from gqlstore.config import ROOT_ID
from gqlstore.config import StoreConfig
from gqlstore.document import ParsedDocument
from gqlstore.document import parse_document
from gqlstore.environment import Environment
from gqlstore.errors import CacheMissError
from gqlstore.errors import DanglingReferenceError
from gqlstore.errors import DocumentError
from gqlstore.errors import EntityNotFoundError
from gqlstore.errors import FragmentCycleError
from gqlstore.errors import GqlStoreError
from gqlstore.errors import MissingFieldError
from gqlstore.errors import NetworkError
from gqlstore.errors import ResponseError
from gqlstore.errors import UnidentifiableEntityError
from gqlstore.errors import UnknownFragmentError
from gqlstore.errors import UnsupportedArgumentError
from gqlstore.errors import UnsupportedShapeError
from gqlstore.network import NetworkLayer
from gqlstore.network import StaticNetworkLayer
from gqlstore.normalizer import normalize
from gqlstore.records import QueryResponse
from gqlstore.records import Reference
from gqlstore.selector import select
from gqlstore.store import RecordStore

__all__ = [
    # Configuration
    "EnvironmentConfig",
    "ROOT_ID",
    "StoreConfig",
    # Core
    "Environment",
    "NetworkLayer",
    "ParsedDocument",
    "QueryResponse",
    "RecordStore",
    "Reference",
    "StaticNetworkLayer",
    "normalize",
    "parse_document",
    "select",
    # Errors
    "CacheMissError",
    "DanglingReferenceError",
    "DocumentError",
    "EntityNotFoundError",
    "FragmentCycleError",
    "GqlStoreError",
    "MissingFieldError",
    "NetworkError",
    "ResponseError",
    "UnidentifiableEntityError",
    "UnknownFragmentError",
    "UnsupportedArgumentError",
    "UnsupportedShapeError",
]
