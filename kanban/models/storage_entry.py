"""Entrée du stockage clé-valeur"""

from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime, timezone
from kanban.core.database import Base


def _now():
    return datetime.now(timezone.utc)


class StorageEntry(Base):
    __tablename__ = "storage_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now)
