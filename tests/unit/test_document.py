"""Unit tests for document parsing and fragment flattening."""

from __future__ import annotations

import pytest

from gqlstore.document import collect_fields
from gqlstore.document import parse_document
from gqlstore.document import response_key
from gqlstore.errors import DocumentError
from gqlstore.errors import FragmentCycleError
from gqlstore.errors import UnknownFragmentError


def _names(parsed, selection_set) -> list[str]:
    return [
        response_key(field)
        for field, _ in collect_fields(selection_set, parsed.fragments)
    ]


class TestParseDocument:
    def test_syntax_error_wrapped(self):
        with pytest.raises(DocumentError) as exc_info:
            parse_document("{ person(id: ) }")
        assert exc_info.value.__cause__ is not None

    def test_fragment_table_built_from_document(self):
        parsed = parse_document(
            """
            query { person(id: "1") { ...A } }
            fragment A on Person { id }
            fragment B on Person { name }
            """
        )
        assert sorted(parsed.fragments) == ["A", "B"]

    def test_duplicate_fragment_names_rejected(self):
        with pytest.raises(DocumentError):
            parse_document(
                "fragment A on Person { id } fragment A on Person { name }"
            )

    def test_document_fragments_shadow_extra_fragments(self):
        extra = parse_document("fragment A on Person { height }").fragments
        parsed = parse_document(
            "fragment A on Person { name } fragment B on Person { id }",
            extra_fragments=extra,
        )
        selection = parsed.fragments["A"].selection_set
        assert _names(parsed, selection) == ["name"]

    def test_extra_fragments_visible(self):
        extra = parse_document("fragment Shared on Person { height }").fragments
        parsed = parse_document(
            "fragment A on Person { ...Shared }", extra_fragments=extra
        )
        assert _names(parsed, parsed.primary_selection()) == ["height"]


class TestDefinitions:
    def test_operation_is_first_operation(self):
        parsed = parse_document(
            "fragment A on Person { id } query First { a } query Second { b }"
        )
        assert parsed.operation().name.value == "First"
        assert parsed.operation("Second").name.value == "Second"

    def test_missing_operation(self):
        parsed = parse_document("fragment A on Person { id }")
        with pytest.raises(DocumentError):
            parsed.operation()
        with pytest.raises(DocumentError):
            parse_document("{ a }").operation("Missing")

    def test_subscription_rejected(self):
        parsed = parse_document("subscription { personUpdated { id } }")
        with pytest.raises(DocumentError):
            parsed.operation()

    def test_primary_selection_defaults_to_first_definition(self):
        parsed = parse_document(
            "fragment A on Person { id name } fragment B on Person { height }"
        )
        assert _names(parsed, parsed.primary_selection()) == ["id", "name"]
        assert _names(parsed, parsed.primary_selection("B")) == ["height"]

    def test_primary_selection_accepts_anonymous_selection(self):
        parsed = parse_document("{ id name }")
        assert _names(parsed, parsed.primary_selection()) == ["id", "name"]

    def test_primary_selection_unknown_fragment(self):
        parsed = parse_document("fragment A on Person { id }")
        with pytest.raises(UnknownFragmentError):
            parsed.primary_selection("Missing")


class TestCollectFields:
    def test_spreads_and_inline_fragments_inlined_in_order(self):
        parsed = parse_document(
            """
            fragment Root on Person {
              id
              ...Details
              ... on Person { height }
            }
            fragment Details on Person { name ...More }
            fragment More on Person { mass }
            """
        )
        assert _names(parsed, parsed.primary_selection()) == [
            "id",
            "name",
            "mass",
            "height",
        ]

    def test_spread_path_reported_per_field(self):
        parsed = parse_document(
            "fragment Root on Person { id ...Details } "
            "fragment Details on Person { name }"
        )
        paths = {
            response_key(field): path
            for field, path in collect_fields(
                parsed.primary_selection(), parsed.fragments
            )
        }
        assert paths == {"id": ("Root",), "name": ("Root", "Details")}

    def test_direct_cycle_detected(self):
        parsed = parse_document(
            "fragment A on Person { ...B } fragment B on Person { ...A }"
        )
        with pytest.raises(FragmentCycleError) as exc_info:
            list(collect_fields(parsed.primary_selection(), parsed.fragments))
        assert exc_info.value.cycle == ("A", "B", "A")

    def test_self_spread_detected(self):
        parsed = parse_document("{ ...A } fragment A on Person { id ...A }")
        with pytest.raises(FragmentCycleError):
            list(collect_fields(parsed.primary_selection(), parsed.fragments))

    def test_repeated_sibling_spread_is_not_a_cycle(self):
        parsed = parse_document(
            "{ ...A ...A } fragment A on Person { id }"
        )
        assert _names(parsed, parsed.primary_selection()) == ["id", "id"]

    def test_unknown_fragment(self):
        parsed = parse_document("{ ...Missing }")
        with pytest.raises(UnknownFragmentError) as exc_info:
            list(collect_fields(parsed.primary_selection(), parsed.fragments))
        assert exc_info.value.fragment_name == "Missing"
