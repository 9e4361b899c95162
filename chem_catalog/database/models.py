"""
SQLAlchemy ORM models for the catalog key-value store.

Each record collection (chemicals, products) is stored as one JSON array
under its collection key, the same shape the catalog loader reads.
"""

from datetime import datetime

from sqlalchemy import String, Integer, DateTime, Text, CheckConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class StoredCollection(Base):
    """
    One persisted record collection.

    The payload is the serialized JSON array of camelCase records.
    """
    __tablename__ = "stored_collections"

    # "chemicals" or "products"
    key: Mapped[str] = mapped_column(String(50), primary_key=True)

    payload: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    record_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("record_count >= 0", name="check_record_count_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<StoredCollection(key='{self.key}', records={self.record_count})>"
