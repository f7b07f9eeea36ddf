# stayplanner/db/models.py

from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Text,
    ForeignKey,
    Numeric,
    Boolean,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship

from stayplanner.db.base import Base


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)

    # Public handle used by calendar widgets (?slug=...)
    slug = Column(String(255), unique=True, index=True, nullable=False)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Nightly base rate, informational only
    price = Column(Numeric(10, 2), nullable=False, default=0)

    city = Column(String(100), nullable=True, index=True)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    reservations = relationship(
        "Reservation",
        back_populates="property",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (
        # At least one night; checkout day is exclusive
        CheckConstraint("from_date < to_date", name="ck_reservations_min_one_night"),
        Index("ix_reservations_property_from", "property_id", "from_date"),
        # Never hand a cancelled reservation's id to a new booking
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)

    property_id = Column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Half-open [from_date, to_date)
    from_date = Column(Date, nullable=False)
    to_date = Column(Date, nullable=False)

    guest_name = Column(String(255), nullable=True)
    guest_email = Column(String(255), nullable=True)
    guests = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    property = relationship("Property", back_populates="reservations")
