# roadmap_studio/db/models/kv_blob.py

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from roadmap_studio.db.base import Base


class KeyValueBlob(Base):
    """Opaque text blob addressed by key (the serialized roadmap collection lives here)."""

    __tablename__ = "kv_blobs"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
