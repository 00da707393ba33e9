"""Market model."""

from sqlalchemy import Column, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin


class Market(Base, TimestampMixin):
    """A store where items get bought. Private to the user who created it."""

    __tablename__ = "markets"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    owner_user_id = Column(String(255), nullable=False, index=True)
