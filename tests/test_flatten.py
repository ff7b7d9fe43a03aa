"""Tests for flattening parsed YAML/JSON documents into dotted keys."""

from __future__ import annotations

import math

import pytest

from flexconfig.errors import SourceParseError, UnsupportedStructureError
from flexconfig.flatten import (
    NodeKind,
    classify,
    flatten,
    format_float,
    format_scalar,
    load_structured,
    parse_structured,
)


# === classify() ===


class TestClassify:
    @pytest.mark.parametrize(
        ("node", "kind"),
        [
            ("text", NodeKind.STRING),
            (True, NodeKind.BOOLEAN),
            (False, NodeKind.BOOLEAN),
            (3, NodeKind.INTEGER),
            (2.5, NodeKind.FLOAT),
            (None, NodeKind.NULL),
            ({"a": 1}, NodeKind.MAPPING),
            ([1, 2], NodeKind.SEQUENCE),
            ((1, 2), NodeKind.SEQUENCE),
        ],
    )
    def test_kinds(self, node: object, kind: NodeKind) -> None:
        assert classify(node) is kind

    def test_unsupported_type_names_path(self) -> None:
        with pytest.raises(UnsupportedStructureError) as exc_info:
            classify(object(), "a.b")
        assert exc_info.value.path == "a.b"
        assert exc_info.value.details["type_name"] == "object"


# === Scalar formatting ===


class TestFormatFloat:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (3.14159, "3.14159"),
            (1.0, "1"),
            (100.0, "100"),
            (123456.0, "123456"),
            (1e6, "1e+06"),
            (1234567.0, "1.234567e+06"),
            (0.5, "0.5"),
            (0.0001, "0.0001"),
            (0.00001, "1e-05"),
            (-4.296e-99, "-4.296e-99"),
            (1e100, "1e+100"),
            (-2.5, "-2.5"),
            (0.0, "0"),
            (-0.0, "-0"),
        ],
    )
    def test_shortest_form(self, value: float, expected: str) -> None:
        assert format_float(value) == expected

    def test_non_finite(self) -> None:
        assert format_float(math.nan) == "NaN"
        assert format_float(math.inf) == "+Inf"
        assert format_float(-math.inf) == "-Inf"


class TestFormatScalar:
    def test_booleans_are_lowercase(self) -> None:
        assert format_scalar(True, NodeKind.BOOLEAN) == "true"
        assert format_scalar(False, NodeKind.BOOLEAN) == "false"

    def test_integer(self) -> None:
        assert format_scalar(-42, NodeKind.INTEGER) == "-42"

    def test_string_unchanged(self) -> None:
        assert format_scalar("  x ", NodeKind.STRING) == "  x "

    def test_container_kind_rejected(self) -> None:
        with pytest.raises(ValueError):
            format_scalar({}, NodeKind.MAPPING)


# === flatten() ===


class TestFlatten:
    def test_sequence_of_mappings(self) -> None:
        assert flatten({"a": [{"x": 1}, {"x": 2}]}) == {"a.0.x": "1", "a.1.x": "2"}

    def test_nested_mappings(self) -> None:
        data = {"animal": {"bear": {"habitat": "forest", "count": 3}}}
        assert flatten(data) == {
            "animal.bear.habitat": "forest",
            "animal.bear.count": "3",
        }

    def test_mixed_scalars(self) -> None:
        data = {"s": "x", "i": 7, "f": 1.5, "b": True}
        assert flatten(data) == {"s": "x", "i": "7", "f": "1.5", "b": "true"}

    def test_empty_containers_and_nulls_produce_nothing(self) -> None:
        assert flatten({"a": {}, "b": [], "c": None, "d": 1}) == {"d": "1"}

    def test_scalar_member_names_are_formatted(self) -> None:
        assert flatten({1: "one", False: "no", 2.5: "x"}) == {"1": "one", "false": "no", "2.5": "x"}

    def test_prefix(self) -> None:
        assert flatten({"b": 1}, "a") == {"a.b": "1"}

    def test_scalar_with_prefix(self) -> None:
        assert flatten(5, "a") == {"a": "5"}

    def test_scalar_at_root_rejected(self) -> None:
        with pytest.raises(UnsupportedStructureError):
            flatten(5)

    def test_cycle_rejected(self) -> None:
        data: dict = {}
        data["self"] = data
        with pytest.raises(UnsupportedStructureError):
            flatten(data)

    def test_shared_subtree_is_not_a_cycle(self) -> None:
        shared = {"x": 1}
        assert flatten({"a": shared, "b": shared}) == {"a.x": "1", "b.x": "1"}

    def test_unsupported_member_name(self) -> None:
        with pytest.raises(UnsupportedStructureError):
            flatten({(1, 2): "x"})

    def test_returns_fresh_mapping(self) -> None:
        data = {"a": 1}
        first = flatten(data)
        first["b"] = "2"
        assert flatten(data) == {"a": "1"}


# === Parsing ===


class TestParseStructured:
    def test_yaml_sequence_of_mappings(self) -> None:
        text = "a:\n  - x: 1\n  - x: 2\n"
        assert parse_structured(text) == {"a.0.x": "1", "a.1.x": "2"}

    def test_json(self) -> None:
        text = '{"server": {"host": "localhost", "port": 8080, "debug": false, "ratio": 0.25}}'
        assert parse_structured(text) == {
            "server.host": "localhost",
            "server.port": "8080",
            "server.debug": "false",
            "server.ratio": "0.25",
        }

    def test_integral_float(self) -> None:
        assert parse_structured("a: 1.0\n") == {"a": "1"}

    def test_null_value_skipped(self) -> None:
        assert parse_structured("a: ~\nb: 1\n") == {"b": "1"}

    def test_timestamp_kept_literal(self) -> None:
        assert parse_structured("released: 2001-12-14\n") == {"released": "2001-12-14"}

    def test_empty_document(self) -> None:
        assert parse_structured("") == {}

    def test_sequence_root_rejected(self) -> None:
        with pytest.raises(SourceParseError) as exc_info:
            parse_structured("- a\n- b\n")
        assert exc_info.value.source_format == "structured"

    def test_plain_text_rejected(self) -> None:
        with pytest.raises(SourceParseError):
            parse_structured("just some words")

    def test_malformed_yaml_rejected(self) -> None:
        with pytest.raises(SourceParseError) as exc_info:
            parse_structured("a: [1, 2\n")
        assert exc_info.value.cause is not None


class TestLoadStructured:
    def test_returns_python_objects(self) -> None:
        assert load_structured("a: [1, two]\n") == {"a": [1, "two"]}

    def test_does_not_construct_arbitrary_objects(self) -> None:
        with pytest.raises(SourceParseError):
            load_structured("a: !!python/object:os.system {}\n")
