"""Tests for pgdiff.types module."""

import dataclasses

import pytest

from pgdiff.types import Clause, ClauseBoundary, ClauseKind


class TestClause:
    """Tests for Clause dataclass."""

    def test_clause_fields(self):
        clause = Clause(kind=ClauseKind.COLUMN, name="id", definition="integer")
        assert clause.kind is ClauseKind.COLUMN
        assert clause.name == "id"
        assert clause.definition == "integer"

    def test_empty_clause_defaults(self):
        clause = Clause(kind=ClauseKind.EMPTY)
        assert clause.name == ""
        assert clause.definition == ""

    def test_clause_is_frozen(self):
        clause = Clause(kind=ClauseKind.EMPTY)
        with pytest.raises(dataclasses.FrozenInstanceError):
            clause.name = "x"


class TestClauseBoundary:
    def test_equality(self):
        assert ClauseBoundary(end=3, closes_list=True) == ClauseBoundary(3, True)
        assert ClauseBoundary(end=3, closes_list=True) != ClauseBoundary(3, False)
