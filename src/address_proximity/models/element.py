"""Element models — the host records that address fields belong to."""

from sqlalchemy import JSON, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from address_proximity.models.base import Base, TimestampMixin

# JSONB on PostgreSQL, native JSON elsewhere
ContentType = JSON().with_variant(JSONB(), "postgresql")


class Element(Base, TimestampMixin):
    """A content record (entry, user, asset, ...) that can own address fields."""

    __tablename__ = "elements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(100), nullable=False, default="entry")

    sites = relationship(
        "ElementSite",
        back_populates="element",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )


class ElementSite(Base, TimestampMixin):
    """Per-site content of an element, keyed by layout field uid."""

    __tablename__ = "element_sites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    element_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("elements.id", ondelete="CASCADE"), nullable=False, index=True
    )
    site_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    content: Mapped[dict | None] = mapped_column(ContentType, nullable=True)

    element = relationship("Element", back_populates="sites")

    __table_args__ = (
        UniqueConstraint("element_id", "site_id", name="uq_element_site"),
        Index("ix_element_sites_site_element", "site_id", "element_id"),
    )
