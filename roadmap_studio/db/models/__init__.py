# roadmap_studio/db/models/__init__.py

from .kv_blob import KeyValueBlob

__all__ = [
    "KeyValueBlob",
]
