"""GraphQL document access on top of ``graphql-core``.

Parses query and fragment source into AST nodes, builds fragment tables
and flattens selection sets (fragment spreads and inline fragments
inlined) for the normalizer and the selector.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from typing import TypeAlias

from graphql import DocumentNode
from graphql import FieldNode
from graphql import FragmentDefinitionNode
from graphql import FragmentSpreadNode
from graphql import GraphQLSyntaxError
from graphql import InlineFragmentNode
from graphql import NameNode
from graphql import OperationDefinitionNode
from graphql import OperationType
from graphql import SelectionSetNode
from graphql import parse

from gqlstore.errors import DocumentError
from gqlstore.errors import FragmentCycleError
from gqlstore.errors import UnknownFragmentError

logger = logging.getLogger(__name__)

FragmentTable: TypeAlias = Mapping[str, FragmentDefinitionNode]
SpreadPath: TypeAlias = tuple[str, ...]


def response_key(field_node: FieldNode) -> str:
    """Return the key a field occupies in a response (alias, else name)."""
    if field_node.alias is not None:
        return field_node.alias.value
    return field_node.name.value


def build_fragment_table(document: DocumentNode) -> dict[str, FragmentDefinitionNode]:
    """Map fragment names to their definitions; duplicate names are rejected."""
    table: dict[str, FragmentDefinitionNode] = {}
    for definition in document.definitions:
        if not isinstance(definition, FragmentDefinitionNode):
            continue
        name = definition.name.value
        if name in table:
            raise DocumentError(f"Fragment {name!r} is defined more than once")
        table[name] = definition
    return table


@dataclass
class ParsedDocument:
    """A parsed document together with the fragments visible to it."""

    document: DocumentNode
    fragments: dict[str, FragmentDefinitionNode] = field(default_factory=dict)

    def operation(self, name: str | None = None) -> OperationDefinitionNode:
        """Return the named operation, or the first one when *name* is ``None``."""
        for definition in self.document.definitions:
            if not isinstance(definition, OperationDefinitionNode):
                continue
            if name is not None and (
                definition.name is None or definition.name.value != name
            ):
                continue
            if definition.operation == OperationType.SUBSCRIPTION:
                raise DocumentError("Subscription operations are not supported")
            return definition
        if name is None:
            raise DocumentError("Document contains no operation")
        raise DocumentError(f"Document contains no operation named {name!r}")

    def primary_selection(self, fragment_name: str | None = None) -> SelectionSetNode:
        """Return the selection set a read or write should use.

        A named fragment when *fragment_name* is given, otherwise the
        first operation or fragment definition in the document. Fragments
        come back wrapped in a spread of themselves so that cycle
        detection sees their name from the start.
        """
        if fragment_name is not None:
            if fragment_name not in self.fragments:
                raise UnknownFragmentError(fragment_name)
            return _spread_of(fragment_name)
        for definition in self.document.definitions:
            if isinstance(definition, FragmentDefinitionNode):
                return _spread_of(definition.name.value)
            if isinstance(definition, OperationDefinitionNode):
                return definition.selection_set
        raise DocumentError("Document contains no executable definition")


def _spread_of(fragment_name: str) -> SelectionSetNode:
    spread = FragmentSpreadNode(name=NameNode(value=fragment_name), directives=())
    return SelectionSetNode(selections=(spread,))


def parse_document(
    source: str,
    *,
    extra_fragments: FragmentTable | None = None,
) -> ParsedDocument:
    """Parse *source*; its own fragments shadow any in *extra_fragments*."""
    try:
        document = parse(source, no_location=True)
    except GraphQLSyntaxError as exc:
        raise DocumentError(f"Invalid GraphQL document: {exc.message}") from exc

    fragments = dict(extra_fragments or {})
    fragments.update(build_fragment_table(document))
    logger.debug(
        "parsed document definitions=%d fragments=%d",
        len(document.definitions),
        len(fragments),
    )
    return ParsedDocument(document=document, fragments=fragments)


def collect_fields(
    selection_set: SelectionSetNode,
    fragments: FragmentTable,
    *,
    path: SpreadPath = (),
    entity_id: str | None = None,
) -> Iterator[tuple[FieldNode, SpreadPath]]:
    """Yield each field of *selection_set* with fragments inlined.

    Every field comes with the chain of fragment spreads that led to it.
    Callers pass that chain back in as *path* when descending into the
    field's own selection set, so a fragment that spreads itself through
    a nested field is also reported as a cycle.
    """
    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            yield selection, path
        elif isinstance(selection, FragmentSpreadNode):
            name = selection.name.value
            if name in path:
                raise FragmentCycleError((*path, name), entity_id=entity_id)
            definition = fragments.get(name)
            if definition is None:
                raise UnknownFragmentError(name, entity_id=entity_id)
            yield from collect_fields(
                definition.selection_set,
                fragments,
                path=(*path, name),
                entity_id=entity_id,
            )
        elif isinstance(selection, InlineFragmentNode):
            yield from collect_fields(
                selection.selection_set,
                fragments,
                path=path,
                entity_id=entity_id,
            )
