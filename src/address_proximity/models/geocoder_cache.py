"""GeocoderCache model — caches geocoding responses per provider and normalized query."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Double, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from address_proximity.models.base import Base


class GeocoderCache(Base):
    """Cached geocoding result keyed by provider and normalized query."""

    __tablename__ = "geocoder_cache"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    provider: Mapped[str] = mapped_column(String(50), nullable=False)
    query_key: Mapped[str] = mapped_column(String(512), nullable=False)
    latitude: Mapped[float] = mapped_column(Double, nullable=False)
    longitude: Mapped[float] = mapped_column(Double, nullable=False)
    raw_response: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    matched_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    cached_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (UniqueConstraint("provider", "query_key", name="uq_provider_query"),)
