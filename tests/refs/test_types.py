"""Tests for expected-type inference and candidate filtering."""

from collections.abc import Callable

import pytest

from sourceref.backend.models import ObjectSummary
from sourceref.refs.types import (
    ABAP_SUFFIX_TO_OBJECT_TYPES,
    filter_by_expected_types,
    infer_expected_types,
)


class TestInferExpectedTypes:
    """infer_expected_types reads the abapGit type segment."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("zcl_demo.clas.abap", frozenset({"CLAS"})),
            ("ZIF_DEMO.INTF.ABAP", frozenset({"INTF"})),
            ("zdemo.prog.abap", frozenset({"PROG"})),
            ("zcl_demo.clas.testclasses.abap", frozenset({"CLAS"})),
            ("zdemo.fugr.abap", frozenset({"FUGR"})),
        ],
    )
    def test_mapped_suffixes(self, name: str, expected: frozenset[str]) -> None:
        assert infer_expected_types(name) == expected

    @pytest.mark.parametrize(
        "name",
        [
            "zcl_demo",
            "zcl_demo.clas",
            "zcl_demo.abap",
            "zcl_demo.xslt.abap",
            "panel.tsx",
            "",
        ],
    )
    def test_no_constraint(self, name: str) -> None:
        """None means 'no constraint', never an empty set."""
        assert infer_expected_types(name) is None

    def test_table_codes_are_upper_case(self) -> None:
        for codes in ABAP_SUFFIX_TO_OBJECT_TYPES.values():
            assert all(code == code.upper() for code in codes)


class TestFilterByExpectedTypes:
    """filter_by_expected_types keeps entries of the inferred types."""

    @pytest.fixture
    def entries(self, object_summary: Callable[..., ObjectSummary]) -> list[ObjectSummary]:
        return [
            object_summary("/a", "ZCL_X", "CLAS/OC"),
            object_summary("/b", "ZCL_X", "PROG/P"),
            object_summary("/c", "ZCL_X", " clas "),
            object_summary("/d", "ZCL_X"),
        ]

    def test_given_no_constraint_when_filter_then_identity(
        self, entries: list[ObjectSummary]
    ) -> None:
        assert filter_by_expected_types(entries, None) == entries

    def test_given_empty_constraint_when_filter_then_identity(
        self, entries: list[ObjectSummary]
    ) -> None:
        assert filter_by_expected_types(entries, frozenset()) == entries

    def test_given_class_constraint_when_filter_then_prefix_and_case_insensitive(
        self, entries: list[ObjectSummary]
    ) -> None:
        """Sub-typed codes match, untyped entries never do."""
        # When
        kept = filter_by_expected_types(entries, frozenset({"CLAS"}))

        # Then
        assert [entry.uri for entry in kept] == ["/a", "/c"]

    def test_given_unmatched_constraint_when_filter_then_empty(
        self, entries: list[ObjectSummary]
    ) -> None:
        assert filter_by_expected_types(entries, frozenset({"TABL"})) == []
