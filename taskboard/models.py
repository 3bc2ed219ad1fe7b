from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from .database import Base


class Setting(Base):
    """Local key-value entries (the client's equivalent of browser local storage)"""
    __tablename__ = "settings"

    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
