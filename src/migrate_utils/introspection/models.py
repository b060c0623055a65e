"""
Schema metadata models.

Read-only reflections of an existing database: the rows the catalog
queries return, mapped into frozen dataclasses.  Nothing here owns or
validates the schema it describes.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class TableInfo:
    """A base table."""

    table_schema: str
    table_name: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ColumnInfo:
    """A column with its type, nullability and default.

    ``data_type`` is the full column type on MySQL (``varchar(32)``,
    ``enum('a','b')``) and ``information_schema.columns.data_type`` on
    PostgreSQL (``character varying``, ``USER-DEFINED``).
    """

    table_schema: str
    table_name: str
    column_name: str
    data_type: str
    is_nullable: str
    column_default: str | None
    ordinal_position: int

    @property
    def nullable(self) -> bool:
        return self.is_nullable.upper() == "YES"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class PrimaryKeyColumn:
    """One column of a primary key constraint."""

    table_schema: str
    table_name: str
    constraint_name: str
    column_name: str
    ordinal_position: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ForeignKey:
    """One column of a foreign key constraint and the column it references."""

    table_schema: str
    table_name: str
    column_name: str
    foreign_table_schema: str
    foreign_table_name: str
    foreign_column_name: str
    constraint_name: str

    @property
    def target(self) -> str:
        return f"{self.foreign_table_name}.{self.foreign_column_name}"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class EnumLabel:
    """One label of an enum type, in declaration order."""

    schema_name: str
    enum_name: str
    enum_value: str
    sort_order: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class SchemaOverview:
    """Everything the schema overview query reports for one schema."""

    schema_name: str
    dialect: str
    tables: list[TableInfo] = field(default_factory=list)
    columns: list[ColumnInfo] = field(default_factory=list)
    primary_keys: list[PrimaryKeyColumn] = field(default_factory=list)
    foreign_keys: list[ForeignKey] = field(default_factory=list)
    enums: list[EnumLabel] = field(default_factory=list)

    @property
    def table_names(self) -> list[str]:
        return [t.table_name for t in self.tables]

    def columns_for(self, table: str) -> list[ColumnInfo]:
        return [c for c in self.columns if c.table_name == table]

    def primary_key_for(self, table: str) -> list[str]:
        return [pk.column_name for pk in self.primary_keys if pk.table_name == table]

    def foreign_keys_for(self, table: str) -> list[ForeignKey]:
        return [fk for fk in self.foreign_keys if fk.table_name == table]

    def enum_types(self) -> dict[str, list[str]]:
        """Enum name -> labels in declaration order."""
        result: dict[str, list[str]] = {}
        for label in self.enums:
            result.setdefault(label.enum_name, []).append(label.enum_value)
        return result

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ColumnRef:
    """A column to sample: ``schema.table.column``.

    ``label`` keeps the text the operator typed (``orders.status`` on MySQL)
    so reports can echo it back.
    """

    schema: str
    table: str
    column: str
    label: str = ""

    @property
    def qualified(self) -> str:
        if not self.schema:
            return f"{self.table}.{self.column}"
        return f"{self.schema}.{self.table}.{self.column}"

    def __str__(self) -> str:
        return self.label or self.qualified

    def to_dict(self) -> dict[str, Any]:
        return {**asdict(self), "qualified": self.qualified}


@dataclass(frozen=True, slots=True)
class DistinctValue:
    """One distinct value and how many rows hold it."""

    value: Any
    freq: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class DistinctSample:
    """Distinct values of one column, most frequent first."""

    column_ref: ColumnRef
    values: list[DistinctValue] = field(default_factory=list)
    limit: int | None = None

    @property
    def truncated(self) -> bool:
        """Whether a positive limit cut off further values."""
        return bool(self.limit) and len(self.values) >= self.limit

    @property
    def total_rows(self) -> int:
        return sum(v.freq for v in self.values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "column_ref": str(self.column_ref),
            "qualified": self.column_ref.qualified,
            "limit": self.limit,
            "truncated": self.truncated,
            "values": [v.to_dict() for v in self.values],
        }


@dataclass(frozen=True, slots=True)
class SchemaDump:
    """Schema overview plus distinct samples, as the full scripts print them."""

    overview: SchemaOverview
    samples: list[DistinctSample] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overview": self.overview.to_dict(),
            "samples": [s.to_dict() for s in self.samples],
        }


__all__ = [
    "TableInfo",
    "ColumnInfo",
    "PrimaryKeyColumn",
    "ForeignKey",
    "EnumLabel",
    "SchemaOverview",
    "ColumnRef",
    "DistinctValue",
    "DistinctSample",
    "SchemaDump",
]
