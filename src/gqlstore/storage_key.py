"""Storage keys: one cache slot per field name and literal argument list.

``person`` and ``person(id: "X")`` live under different keys, as do
``person(id: "X")`` and ``person(id: "Y")``. Arguments keep their
declaration order so the same selection always encodes identically.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from graphql import BooleanValueNode
from graphql import FieldNode
from graphql import FloatValueNode
from graphql import IntValueNode
from graphql import NullValueNode
from graphql import StringValueNode
from graphql import ValueNode

from gqlstore.errors import UnsupportedArgumentError

ArgumentValue = str | int | float | bool | None


def _render(value: ArgumentValue) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return json.dumps("true" if value else "false")
    if isinstance(value, (int, float)):
        return json.dumps(str(value))
    return json.dumps(value)


def encode(
    field_name: str,
    arguments: Sequence[tuple[str, ArgumentValue]] = (),
) -> str:
    """Encode a field and its literal arguments as a storage key.

    Numbers and booleans render as quoted text, so ``first: 10`` and
    ``first: "10"`` share a key, matching GraphQL input coercion for IDs.

    >>> encode("person", [("id", "cGVvcGxlOjEz")])
    'person{"id":"cGVvcGxlOjEz"}'
    """
    if not arguments:
        return field_name
    parts = []
    for name, value in arguments:
        if value is not None and not isinstance(value, (str, int, float, bool)):
            raise UnsupportedArgumentError(field_name, name, type(value).__name__)
        parts.append(f"{json.dumps(name)}:{_render(value)}")
    return f"{field_name}{{{','.join(parts)}}}"


def _literal(field_name: str, argument_name: str, node: ValueNode) -> ArgumentValue:
    if isinstance(node, StringValueNode):
        return node.value
    if isinstance(node, BooleanValueNode):
        return node.value
    if isinstance(node, IntValueNode):
        return int(node.value)
    if isinstance(node, FloatValueNode):
        return float(node.value)
    if isinstance(node, NullValueNode):
        return None
    # variables, enums, lists and input objects
    raise UnsupportedArgumentError(field_name, argument_name, node.kind)


def field_arguments(field_node: FieldNode) -> list[tuple[str, ArgumentValue]]:
    """Return ``(name, literal)`` pairs for a field's arguments, in order."""
    field_name = field_node.name.value
    return [
        (arg.name.value, _literal(field_name, arg.name.value, arg.value))
        for arg in field_node.arguments or ()
    ]


def storage_key_for(field_node: FieldNode) -> str:
    """Storage key for a field selection."""
    return encode(field_node.name.value, field_arguments(field_node))
