"""
Database models for the SQL persistence backend.

Records and click ledgers are JSON documents; the table only maps a key to a
serialized document.
"""

from .kv_entry import KeyValueEntry

__all__ = ["KeyValueEntry"]
