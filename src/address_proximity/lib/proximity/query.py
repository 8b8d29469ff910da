"""Element queries that proximity searches attach their clauses to.

An element query has two scopes. The inner select joins elements to their
per-site rows and is where joins, projections and filters are added. The
outer select wraps it as a subquery and is what callers execute; "public"
projections re-expose inner columns there under caller-facing names.
"""

from typing import Any, Protocol

from sqlalchemy import ColumnElement, FromClause, Select, select

from address_proximity.models.element import Element, ElementSite


class HostQuery(Protocol):
    """Query builder interface a proximity search compiles into."""

    def inner_join(self, target: FromClause | type, onclause: ColumnElement[bool]) -> None: ...

    def add_select(self, *columns: ColumnElement[Any]) -> None: ...

    def add_public_select(self, name: str, alias: str) -> None: ...

    def where(self, *criteria: ColumnElement[bool]) -> None: ...

    def having(self, *criteria: ColumnElement[bool]) -> None: ...


class ElementQuery:
    """Mutable builder over an element select."""

    def __init__(self, *, site_id: int | None = None, element_type: str | None = None) -> None:
        sub_query = select(
            Element.id.label("element_id"),
            ElementSite.site_id.label("site_id"),
        ).join(ElementSite, ElementSite.element_id == Element.id)
        if site_id is not None:
            sub_query = sub_query.where(ElementSite.site_id == site_id)
        if element_type is not None:
            sub_query = sub_query.where(Element.type == element_type)
        self.sub_query: Select = sub_query
        self.public_columns: list[tuple[str, str]] = []

    def inner_join(self, target: FromClause | type, onclause: ColumnElement[bool]) -> None:
        self.sub_query = self.sub_query.join(target, onclause)

    def add_select(self, *columns: ColumnElement[Any]) -> None:
        self.sub_query = self.sub_query.add_columns(*columns)

    def add_public_select(self, name: str, alias: str) -> None:
        """Expose inner column ``name`` as ``alias`` on the outer select."""
        self.public_columns.append((name, alias))

    def where(self, *criteria: ColumnElement[bool]) -> None:
        self.sub_query = self.sub_query.where(*criteria)

    def having(self, *criteria: ColumnElement[bool]) -> None:
        self.sub_query = self.sub_query.having(*criteria)

    def statement(self) -> Select:
        """Build the executable outer select."""
        inner = self.sub_query.subquery("elements_subquery")
        public = [inner.c[name].label(alias) for name, alias in self.public_columns]
        return select(inner, *public)
