"""Core type definitions for pgdiff."""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "ClauseKind",
    "Clause",
    "ClauseBoundary",
]


class ClauseKind(Enum):
    """Kinds of top-level clauses inside a CREATE TABLE column list."""

    COLUMN = "column"
    CONSTRAINT = "constraint"
    EMPTY = "empty"


@dataclass(frozen=True)
class Clause:
    """A classified clause of the column list.

    For EMPTY clauses name and definition are both empty strings.
    """

    kind: ClauseKind
    name: str = ""
    definition: str = ""


@dataclass(frozen=True)
class ClauseBoundary:
    """Where the next top-level clause ends.

    end is the offset of the terminating ',' or ')'; closes_list is True
    when the terminator was ')' (no more clauses follow).
    """

    end: int
    closes_list: bool
