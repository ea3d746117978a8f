from .base import PatternCatalog


class MemoryCatalog(PatternCatalog):
    """Catalog kept in process memory."""

    def __init__(self, records=None, **kwargs):
        super().__init__(**kwargs)
        self._records = list(records or [])

    def _load(self):
        return list(self._records)

    def _store(self, records):
        self._records = list(records)
