import json
from pathlib import Path

from .base import PatternCatalog, PatternRecord


class JsonFileCatalog(PatternCatalog):
    """Catalog persisted as a JSON list in a single file.

    A missing file is an empty catalog. The full list is rewritten on
    every change.
    """

    def __init__(self, path, **kwargs):
        super().__init__(**kwargs)
        self.path = Path(path)

    def _load(self):
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Failed to load patterns from {self.path}") from exc
        if not isinstance(data, list):
            raise ValueError(f"Pattern file {self.path} must contain a JSON list")
        return [PatternRecord.from_dict(item) for item in data]

    def _store(self, records):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [record.to_dict() for record in records]
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
