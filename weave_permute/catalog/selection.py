from .base import PatternRecord


class PatternSelection:
    """The currently selected pattern, or None when nothing is selected."""

    def __init__(self, record: PatternRecord | None = None):
        self.current: PatternRecord | None = record
        self._unsubscribe = None

    @property
    def is_selected(self) -> bool:
        return self.current is not None

    def select(self, record: PatternRecord | None) -> None:
        self.current = record

    def clear(self) -> None:
        self.current = None

    def attach(self, catalog) -> None:
        """Follow catalog changes: drop a deleted selection, refresh an edited one."""
        self.detach()
        self._unsubscribe = catalog.subscribe(self._on_change)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_change(self, records) -> None:
        if self.current is None:
            return
        by_id = {record.id: record for record in records}
        self.current = by_id.get(self.current.id)
