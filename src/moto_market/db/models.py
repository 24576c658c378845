"""
moto_market.db.models

Persistence schema for the marketplace.

Responsibilities:
- Define ORM models:
  - AdminUser: the single privileged principal class
  - Motorcycle / MotorcycleImage: listed products and their images
  - Testimonial: customer quotes shown on the site
  - Inquiry: sell/buy requests submitted by visitors
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moto_market.db.base import Base


def _utcnow() -> datetime:
    # Naive UTC timestamps; SQLite has no timezone-aware column type.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class AdminUser(Base):
    __tablename__ = "admin_users"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


class Motorcycle(Base):
    __tablename__ = "motorcycles"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    year: Mapped[str | None] = mapped_column(String(10), nullable=True)
    mileage: Mapped[str | None] = mapped_column(String(50), nullable=True)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    # Always loaded with the motorcycle: async sessions cannot lazy-load on attribute access.
    images: Mapped[list[MotorcycleImage]] = relationship(
        back_populates="motorcycle",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="MotorcycleImage.created_at",
    )


class MotorcycleImage(Base):
    __tablename__ = "motorcycle_images"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    motorcycle_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True),
        ForeignKey("motorcycles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Identifier minted by the upload registry; null for externally hosted images.
    upload_id: Mapped[str | None] = mapped_column(String(32), nullable=True, index=True)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    image_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    size: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    motorcycle: Mapped[Motorcycle] = relationship(back_populates="images")


class Testimonial(Base):
    __tablename__ = "testimonials"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    color: Mapped[str] = mapped_column(String(50), nullable=False, default="blue")

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


class Inquiry(Base):
    __tablename__ = "inquiries"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    model: Mapped[str | None] = mapped_column(String(255), nullable=True)
    year: Mapped[str | None] = mapped_column(String(10), nullable=True)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)

    __table_args__ = (Index("ix_inquiries_phone_created", "phone", "created_at"),)


# --- Module Notes -----------------------------------------------------------
# Prices, years and mileage are display strings ("KSh 85,000", "15,000 km"), not numbers.
