from datetime import datetime
from typing import Optional, List

from sqlalchemy import String, Integer, Text, TIMESTAMP, JSON
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base, utc_now


class Plant(Base):
    """Catalog entry shown on a wiki page; the target of revisions."""
    __tablename__ = "plants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    scientific_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    color: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    height: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    edibilities: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    sun_preferences: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)
