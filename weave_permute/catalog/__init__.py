"""Named pattern storage behind a single interface."""

from .base import PatternCatalog, PatternRecord
from .json_store import JsonFileCatalog
from .memory import MemoryCatalog
from .selection import PatternSelection

__all__ = ["PatternCatalog", "PatternRecord", "JsonFileCatalog", "MemoryCatalog", "PatternSelection"]
