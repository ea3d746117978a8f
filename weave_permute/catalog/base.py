import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from weave_permute.config import DEFAULT_CONFIG
from weave_permute.validation import ValidatedPattern, validate_pattern


@dataclass(frozen=True)
class PatternRecord:
    """A named, stored pattern definition."""

    id: str
    name: str
    size: int
    pattern: tuple[int, ...]
    created_at: str

    def validated(self) -> ValidatedPattern:
        return validate_pattern(self.size, self.pattern)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "size": self.size,
            "pattern": list(self.pattern),
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PatternRecord":
        try:
            validated = validate_pattern(data["size"], data["pattern"])
            return cls(
                id=str(data["id"]),
                name=str(data["name"]),
                size=validated.size,
                pattern=validated.pattern,
                created_at=str(data["created_at"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Malformed pattern record: {data!r}") from exc


class PatternCatalog:
    """
    Storage for named patterns.

    Subclasses provide ``_load``/``_store``; naming rules, size bounds,
    pattern validation and change notification live here so every backend
    behaves the same.

    """

    def __init__(self, min_size: int = DEFAULT_CONFIG["min_size"], max_size: int = DEFAULT_CONFIG["max_size"]):
        self.min_size = min_size
        self.max_size = max_size
        self._subscribers = []

    def _load(self) -> list[PatternRecord]:
        raise NotImplementedError

    def _store(self, records: list[PatternRecord]) -> None:
        raise NotImplementedError

    def list(self) -> list[PatternRecord]:
        return list(self._load())

    def get(self, pattern_id: str) -> PatternRecord:
        for record in self._load():
            if record.id == pattern_id:
                return record
        raise KeyError(pattern_id)

    def create(self, name: str, size: int, pattern) -> PatternRecord:
        name = self._check_name(name)
        validated = validate_pattern(size, pattern)
        if not self.min_size <= validated.size <= self.max_size:
            raise ValueError(
                f"Pattern size must be between {self.min_size} and {self.max_size}, got {validated.size}"
            )
        record = PatternRecord(
            id=uuid.uuid4().hex,
            name=name,
            size=validated.size,
            pattern=validated.pattern,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        records = self._load()
        records.append(record)
        self._commit(records)
        return record

    def update(self, pattern_id: str, name: str | None = None, pattern=None) -> PatternRecord:
        """Rename and/or re-pattern a record. Size is fixed at creation."""
        records = self._load()
        for i, record in enumerate(records):
            if record.id != pattern_id:
                continue
            changes = {}
            if name is not None:
                changes["name"] = self._check_name(name)
            if pattern is not None:
                changes["pattern"] = validate_pattern(record.size, pattern).pattern
            updated = replace(record, **changes)
            records[i] = updated
            self._commit(records)
            return updated
        raise KeyError(pattern_id)

    def delete(self, pattern_id: str) -> bool:
        records = self._load()
        remaining = [r for r in records if r.id != pattern_id]
        if len(remaining) == len(records):
            return False
        self._commit(remaining)
        return True

    def subscribe(self, callback):
        """Register callback(records) for every change; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _commit(self, records) -> None:
        self._store(records)
        snapshot = list(records)
        for callback in list(self._subscribers):
            callback(list(snapshot))

    @staticmethod
    def _check_name(name: str) -> str:
        if name is None or not str(name).strip():
            raise ValueError("Please enter a pattern name")
        return str(name).strip()
