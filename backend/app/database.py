"""JSON document store: the whole database is one JSON file held in memory.

Document layout:
    {
      "users": [...], "shipments": [...], "containers": [...],
      "fleet": [...], "fleet_trips": [...], "inventory": [...],
      "expenses": [...], "financials": {...}
    }

Rows are validated into their pydantic record types on the way in and out,
so calculators only ever see typed records. Every mutation is flushed to
disk by atomic replace (temp file + fsync + os.replace). `transaction()`
groups several mutations into one unit of work: a single flush on success,
and the in-memory document restored to its prior state on failure.

FastAPI dependency:
  - get_store()  → the process-wide DocumentStore
"""

import copy
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, TypeVar

from app.config import settings
from app.middleware.exceptions import StorageError
from app.models import (
    Container,
    Expense,
    FinancialSnapshot,
    FleetTrip,
    FleetVehicle,
    InventoryItem,
    Record,
    Shipment,
    User,
)
from app.models.base import utcnow

logger = logging.getLogger("tms.store")

R = TypeVar("R", bound=Record)
Predicate = Callable[[Any], bool]

COLLECTIONS: dict[str, type[Record]] = {
    "users": User,
    "shipments": Shipment,
    "containers": Container,
    "fleet": FleetVehicle,
    "fleet_trips": FleetTrip,
    "inventory": InventoryItem,
    "expenses": Expense,
}

FINANCIALS_KEY = "financials"


def _empty_document() -> dict:
    doc: dict[str, Any] = {name: [] for name in COLLECTIONS}
    doc[FINANCIALS_KEY] = None
    return doc


class DocumentStore:
    """In-memory document with whole-file persistence."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._doc: dict | None = None
        self._lock = threading.RLock()
        self._tx_depth = 0

    # ── Load / save ──────────────────────────────────────────

    def load(self) -> None:
        """(Re)load the document from disk. A missing file is an empty store."""
        with self._lock:
            doc = _empty_document()
            if not self.path.exists():
                logger.info("No data file at %s, starting empty", self.path)
                self._doc = doc
                return
            try:
                raw = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                logger.error("Failed to load %s: %s", self.path, e)
                raise StorageError(f"Could not load {self.path}: {e}") from e
            if not isinstance(raw, dict):
                logger.error("Malformed %s: top level is %s", self.path, type(raw).__name__)
                raise StorageError(f"Could not load {self.path}: expected a JSON object")
            bad = [
                name for name in COLLECTIONS
                if name in raw and not isinstance(raw[name], list)
            ]
            if bad:
                logger.error("Malformed %s: non-list collections %s", self.path, bad)
                raise StorageError(
                    f"Could not load {self.path}: collections must be lists ({', '.join(bad)})"
                )
            if raw.get(FINANCIALS_KEY) is not None and not isinstance(raw[FINANCIALS_KEY], dict):
                raise StorageError(f"Could not load {self.path}: financials must be an object")
            doc.update(raw)
            self._doc = doc
            logger.info(
                "Loaded %s (%s)",
                self.path,
                ", ".join(f"{name}={len(doc[name])}" for name in COLLECTIONS),
            )

    def save(self) -> None:
        """Write the document atomically: readers never see a half-written file."""
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(self.document, fh, indent=2, ensure_ascii=False)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_path, self.path)
            except OSError as e:
                logger.error("Failed to save %s: %s", self.path, e)
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise StorageError(f"Could not save {self.path}: {e}") from e
            logger.debug("Saved %s", self.path)

    @property
    def document(self) -> dict:
        if self._doc is None:
            self.load()
        return self._doc

    def _flush(self) -> None:
        if self._tx_depth == 0:
            self.save()

    # ── Unit of work ─────────────────────────────────────────

    @contextmanager
    def transaction(self) -> Iterator["DocumentStore"]:
        """Group mutations into a single persisted write.

        Nested transactions join the outermost one.
        """
        with self._lock:
            outermost = self._tx_depth == 0
            snapshot = copy.deepcopy(self.document) if outermost else None
            self._tx_depth += 1
            try:
                yield self
            except BaseException:
                self._tx_depth -= 1
                if outermost:
                    self._doc = snapshot
                raise
            self._tx_depth -= 1
            if outermost:
                try:
                    self.save()
                except StorageError:
                    self._doc = snapshot
                    raise

    # ── Reads ────────────────────────────────────────────────

    def _rows(self, collection: str) -> list[dict]:
        if collection not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {collection}")
        return self.document.setdefault(collection, [])

    def find_all(self, collection: str, predicate: Predicate | None = None) -> list:
        model = COLLECTIONS[collection]
        with self._lock:
            records = [model.model_validate(row) for row in self._rows(collection)]
        if predicate is None:
            return records
        return [r for r in records if predicate(r)]

    def find_one(self, collection: str, predicate: Predicate):
        model = COLLECTIONS[collection]
        with self._lock:
            for row in self._rows(collection):
                record = model.model_validate(row)
                if predicate(record):
                    return record
        return None

    def get(self, collection: str, record_id: int):
        return self.find_one(collection, lambda r: r.id == record_id)

    def next_id(self, collection: str) -> int:
        ids = [row.get("id") for row in self._rows(collection)]
        return max((i for i in ids if isinstance(i, int)), default=0) + 1

    # ── Writes ───────────────────────────────────────────────

    def insert(self, collection: str, record: R) -> R:
        """Append a record, assigning the next integer id if it has none."""
        model = COLLECTIONS[collection]
        if not isinstance(record, model):
            raise TypeError(f"{collection} expects {model.__name__}, got {type(record).__name__}")
        with self._lock:
            data = record.model_dump()
            if data.get("id") is None:
                data["id"] = self.next_id(collection)
            stored = model.model_validate(data)
            self._rows(collection).append(stored.model_dump(mode="json"))
            self._flush()
            return stored

    def update(self, collection: str, predicate: Predicate, patch: dict):
        """Merge `patch` into the first matching record. Returns it, or None."""
        model = COLLECTIONS[collection]
        with self._lock:
            rows = self._rows(collection)
            for index, row in enumerate(rows):
                current = model.model_validate(row)
                if predicate(current):
                    updated = model.model_validate(
                        {**current.model_dump(), **patch, "id": current.id}
                    )
                    rows[index] = updated.model_dump(mode="json")
                    self._flush()
                    return updated
        return None

    def update_many(self, collection: str, predicate: Predicate, patch: dict) -> int:
        model = COLLECTIONS[collection]
        count = 0
        with self._lock:
            rows = self._rows(collection)
            for index, row in enumerate(rows):
                current = model.model_validate(row)
                if predicate(current):
                    updated = model.model_validate(
                        {**current.model_dump(), **patch, "id": current.id}
                    )
                    rows[index] = updated.model_dump(mode="json")
                    count += 1
            if count:
                self._flush()
        return count

    def delete_one(self, collection: str, predicate: Predicate) -> bool:
        model = COLLECTIONS[collection]
        with self._lock:
            rows = self._rows(collection)
            for index, row in enumerate(rows):
                if predicate(model.model_validate(row)):
                    del rows[index]
                    self._flush()
                    return True
        return False

    # ── Financial singleton ──────────────────────────────────

    def get_financials(self) -> FinancialSnapshot:
        raw = self.document.get(FINANCIALS_KEY)
        if not raw:
            return FinancialSnapshot()
        return FinancialSnapshot.model_validate(raw)

    def update_financials(self, patch: dict) -> FinancialSnapshot:
        with self._lock:
            current = self.get_financials().model_dump()
            snapshot = FinancialSnapshot.model_validate(
                {**current, **patch, "updated_at": utcnow()}
            )
            self.document[FINANCIALS_KEY] = snapshot.model_dump(mode="json")
            self._flush()
            return snapshot


store = DocumentStore(settings.data_file)


def get_store() -> DocumentStore:
    """FastAPI dependency returning the process-wide store."""
    return store
