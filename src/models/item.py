"""Item model."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Item(Base, TimestampMixin):
    """Product on a shopping list.

    ``price``, ``quantity`` and ``market_id`` only carry values while
    ``is_purchased`` is true.
    """

    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    list_id = Column(Integer, ForeignKey("lists.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=True)
    notes = Column(String, nullable=True)
    is_purchased = Column(Boolean, default=False, nullable=False, index=True)
    price = Column(Numeric(12, 2), nullable=True)
    quantity = Column(Numeric(12, 3), nullable=True)
    market_id = Column(Integer, ForeignKey("markets.id"), nullable=True, index=True)
    purchased_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    list = relationship("List", back_populates="items")
    market = relationship("Market")
