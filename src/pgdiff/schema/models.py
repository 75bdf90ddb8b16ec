"""Schema representation classes."""

from dataclasses import dataclass, field
from typing import Optional
import re

from pgdiff.exceptions import ParserError

PATTERN_NOT_NULL = re.compile(r"^(.+)\s+NOT\s+NULL$", re.IGNORECASE | re.DOTALL)
PATTERN_NULL = re.compile(r"^(.+)\s+NULL$", re.IGNORECASE | re.DOTALL)
PATTERN_DEFAULT = re.compile(r"^(.+?)\s+DEFAULT\s+(.+)$", re.IGNORECASE | re.DOTALL)
PATTERN_PRIMARY_KEY = re.compile(r"^PRIMARY\s+KEY\b", re.IGNORECASE)


def _strip_nullability(text: str) -> tuple[str, Optional[bool]]:
    """Split a trailing NOT NULL / NULL off text.

    Returns the remaining text and the nullability it declared, or None when
    neither keyword ends the text.
    """
    match = PATTERN_NOT_NULL.match(text)
    if match:
        return match.group(1).strip(), False
    match = PATTERN_NULL.match(text)
    if match:
        return match.group(1).strip(), True
    return text, None


@dataclass
class Column:
    """Column definition.

    definition keeps the raw text following the column name; type, default
    and nullable are interpreted from it by parse_definition().
    """

    name: str
    definition: str = ""
    type: Optional[str] = None
    nullable: bool = True
    default: Optional[str] = None

    def parse_definition(self, definition: str) -> None:
        """Interpret the text following the column name.

        Understands "<type> [DEFAULT <expr>] [[NOT] NULL]" with the
        nullability keyword either last or right after the type.

        Raises:
            ParserError: If the definition is empty
        """
        text = definition.strip()
        if not text:
            raise ParserError(
                f"{ParserError.CANNOT_PARSE_COMMAND}empty definition of column '{self.name}'"
            )
        self.definition = text
        # derived fields describe only the latest definition
        self.default = None
        self.nullable = True

        match = PATTERN_DEFAULT.match(text)
        if match:
            default, nullable = _strip_nullability(match.group(2).strip())
            self.default = default
            text, type_nullable = _strip_nullability(match.group(1).strip())
            if nullable is None:
                nullable = type_nullable
        else:
            text, nullable = _strip_nullability(text)

        if nullable is not None:
            self.nullable = nullable
        self.type = text

    @property
    def full_definition(self) -> str:
        """Render the column back as "name type [DEFAULT x] [NOT NULL]"."""
        parts = [self.name]
        if self.type:
            parts.append(self.type)
        if self.default is not None:
            parts.append(f"DEFAULT {self.default}")
        if not self.nullable:
            parts.append("NOT NULL")
        return " ".join(parts)


@dataclass
class Constraint:
    """Named table constraint. The body text is kept as written."""

    name: str
    table_name: str
    definition: str = ""

    @property
    def is_primary_key(self) -> bool:
        """Check if the constraint body declares a primary key."""
        return PATTERN_PRIMARY_KEY.match(self.definition) is not None


@dataclass
class Table:
    """Table definition.

    with_oids is tri-state: None when the statement did not say, otherwise
    True for WITH OIDS and False for WITHOUT OIDS.
    """

    name: str
    columns: list[Column] = field(default_factory=list)
    constraints: dict[str, Constraint] = field(default_factory=dict)
    inherits: Optional[str] = None
    with_oids: Optional[bool] = None

    def get_column(self, name: str) -> Column:
        """Get a column by name, appending a new one if it does not exist."""
        column = self.find_column(name)
        if column is None:
            column = Column(name=name)
            self.columns.append(column)
        return column

    def find_column(self, name: str) -> Optional[Column]:
        """Get a column by name without creating it."""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def get_constraint(self, name: str) -> Constraint:
        """Get a constraint by name, creating it if it does not exist."""
        if name not in self.constraints:
            self.constraints[name] = Constraint(name=name, table_name=self.name)
        return self.constraints[name]

    def column_names(self) -> list[str]:
        """Get column names in declaration order."""
        return [col.name for col in self.columns]

    @property
    def primary_key(self) -> Optional[Constraint]:
        """Get the first PRIMARY KEY constraint, if any."""
        for constraint in self.constraints.values():
            if constraint.is_primary_key:
                return constraint
        return None


@dataclass
class Schema:
    """Complete schema definition."""

    tables: dict[str, Table] = field(default_factory=dict)

    def get_table(self, name: str) -> Table:
        """Get a table by name, creating it if it does not exist."""
        if name not in self.tables:
            self.tables[name] = Table(name=name)
        return self.tables[name]

    def find_table(self, name: str) -> Optional[Table]:
        """Get a table by name without creating it."""
        return self.tables.get(name)

    def table_names(self) -> set[str]:
        """Get all table names."""
        return set(self.tables.keys())
