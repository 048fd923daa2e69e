from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func
from linktracker_app.database.connection import Base


class KeyValueEntry(Base):
    """
    One persisted JSON document.

    The link tracker keeps two documents (``shortenedUrls`` and
    ``shortcodeClicks``), each rewritten as a whole on every mutation.
    """
    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
