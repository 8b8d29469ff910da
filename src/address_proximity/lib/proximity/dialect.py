"""Backend-specific rules for filtering on computed, aliased projections.

MySQL cannot reference a select-list alias in WHERE but accepts it in
HAVING, even without GROUP BY. PostgreSQL accepts select-list aliases in
neither, so the filter goes into WHERE with the aliased expression inlined.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import ColumnElement, literal_column
from sqlalchemy.sql.elements import Label

if TYPE_CHECKING:
    from address_proximity.lib.proximity.query import HostQuery


class Backend(StrEnum):
    """Supported SQL backends."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"

    @classmethod
    def from_dialect(cls, dialect_name: str) -> Backend:
        """Map a SQLAlchemy dialect name to a backend.

        MariaDB shares MySQL's rules; every other dialect follows PostgreSQL's,
        whose inlined-expression form is accepted everywhere.
        """
        if dialect_name in ("mysql", "mariadb"):
            return cls.MYSQL
        return cls.POSTGRESQL


class FilterClause(StrEnum):
    """Clause a projection filter is attached to."""

    WHERE = "where"
    HAVING = "having"


_CLAUSE_BY_BACKEND: dict[Backend, FilterClause] = {
    Backend.MYSQL: FilterClause.HAVING,
    Backend.POSTGRESQL: FilterClause.WHERE,
}


class DialectAdapter:
    """Attaches filters on aliased projections the way the backend requires."""

    def __init__(self, backend: Backend) -> None:
        self.backend = backend

    def clause_for(self, *projections: Label) -> FilterClause:
        """Return the clause a filter over ``projections`` must be attached to.

        Every projection filter asks again rather than reusing an earlier
        answer; today the choice depends on the backend alone.
        """
        return _CLAUSE_BY_BACKEND[self.backend]

    @staticmethod
    def reference(term: Label | float, clause: FilterClause) -> ColumnElement | float:
        """Refer to a projection by alias (HAVING) or by its expression (WHERE)."""
        if not isinstance(term, Label):
            return term
        if clause is FilterClause.HAVING:
            return literal_column(term.name)
        return term.element

    def filter_within(self, query: HostQuery, value: Label, limit: Label | float) -> FilterClause:
        """Add ``value <= limit`` to the query.

        Args:
            query: Host query receiving the predicate.
            value: Aliased projection being bounded (e.g. distance).
            limit: Another aliased projection or a plain number.

        Returns:
            The clause the predicate was attached to.
        """
        projections = (value, limit) if isinstance(limit, Label) else (value,)
        clause = self.clause_for(*projections)
        predicate = self.reference(value, clause) <= self.reference(limit, clause)
        if clause is FilterClause.HAVING:
            query.having(predicate)
        else:
            query.where(predicate)
        return clause
