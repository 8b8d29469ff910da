"""Address model — one geocoded address bound to an element, site and field."""

from sqlalchemy import JSON, ForeignKey, Index, Integer, Numeric, SmallInteger, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from address_proximity.models.base import Base, TimestampMixin


class Address(Base, TimestampMixin):
    """Stored address with structured subfields and coordinates."""

    __tablename__ = "proximity_addresses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    element_id: Mapped[int] = mapped_column(Integer, ForeignKey("elements.id", ondelete="CASCADE"), nullable=False)
    site_id: Mapped[int] = mapped_column(Integer, nullable=False)
    field_id: Mapped[int] = mapped_column(Integer, nullable=False)

    formatted: Mapped[str | None] = mapped_column(String(255), nullable=True)
    raw: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    # Subfields
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    street1: Mapped[str | None] = mapped_column(String(255), nullable=True)
    street2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    state: Mapped[str | None] = mapped_column(String(255), nullable=True)
    zip: Mapped[str | None] = mapped_column(String(255), nullable=True)
    neighborhood: Mapped[str | None] = mapped_column(String(255), nullable=True)
    county: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country_code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    place_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    lat: Mapped[float | None] = mapped_column(Numeric(12, 8, asdecimal=False), nullable=True)
    lng: Mapped[float | None] = mapped_column(Numeric(12, 8, asdecimal=False), nullable=True)
    zoom: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)

    __table_args__ = (
        UniqueConstraint("element_id", "site_id", "field_id", name="uq_address_element_site_field"),
        Index("ix_proximity_addresses_element_id", "element_id"),
        Index("ix_proximity_addresses_site_id", "site_id"),
        Index("ix_proximity_addresses_field_id", "field_id"),
        Index("ix_proximity_addresses_site_field", "site_id", "field_id"),
    )

    @property
    def has_coords(self) -> bool:
        """Whether both latitude and longitude are stored."""
        return self.lat is not None and self.lng is not None
