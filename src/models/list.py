"""List model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin

list_markets = Table(
    "list_markets",
    Base.metadata,
    Column("list_id", Integer, ForeignKey("lists.id"), primary_key=True),
    Column("market_id", Integer, ForeignKey("markets.id"), primary_key=True),
)


class List(Base, TimestampMixin):
    """Shopping list, owned by one user and optionally shared by email."""

    __tablename__ = "lists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    # Nullable for lists created before ownership was recorded
    owner_user_id = Column(String(255), nullable=True, index=True)

    # Relationships
    markets = relationship("Market", secondary=list_markets, order_by="Market.name")
    items = relationship(
        "Item", back_populates="list", order_by="Item.id", cascade="all, delete-orphan"
    )
    shares = relationship(
        "ListShare", back_populates="list", order_by="ListShare.id", cascade="all, delete-orphan"
    )


class ListShare(Base, TimestampMixin):
    """Grants a principal (invited email or user id) non-owner access to a list."""

    __tablename__ = "list_shares"
    __table_args__ = (UniqueConstraint("list_id", "principal", name="uq_list_share_principal"),)

    id = Column(Integer, primary_key=True, index=True)
    list_id = Column(Integer, ForeignKey("lists.id"), nullable=False, index=True)
    principal = Column(String(255), nullable=False, index=True)

    # Relationships
    list = relationship("List", back_populates="shares")
