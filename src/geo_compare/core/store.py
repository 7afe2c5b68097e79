"""Boundary store: key lookup and upsert by normalized name.

The JSON implementation keeps one object keyed by normalized name and
rewrites it on every upsert, so writing the same record twice leaves the
file byte-for-byte unchanged.
"""

import json
import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path

from geo_compare.models import BoundaryRecord
from .errors import PersistenceError

logger = logging.getLogger(__name__)

_QUALIFIER_RE = re.compile(r"\s+(city|metropolitan|metro|area|county|greater)\s*", re.IGNORECASE)
_SPACE_RE = re.compile(r"\s+")


def normalize_name(name: str) -> str:
    """Lowercase, drop trailing qualifiers like 'City' or 'County', squash spaces."""
    name = _QUALIFIER_RE.sub(" ", name.lower())
    return _SPACE_RE.sub(" ", name).strip()


def default_store_path() -> Path:
    return Path.home() / ".cache" / "geo-compare" / "boundaries.json"


class BoundaryStore(ABC):
    """Persistent boundary records keyed by normalized name."""

    @abstractmethod
    def get_by_key(self, key: str) -> BoundaryRecord | None:
        """Lookup by an already normalized name."""

    def get(self, name: str) -> BoundaryRecord | None:
        """Exact lookup by name, normalized once."""
        return self.get_by_key(normalize_name(name))

    @abstractmethod
    def upsert(self, record: BoundaryRecord) -> None:
        """Insert or overwrite the record stored under ``record.normalized_name``."""

    @abstractmethod
    def records(self) -> list[BoundaryRecord]:
        pass

    def find(self, name: str) -> BoundaryRecord | None:
        """Loose lookup used when loading a location for comparison.

        Only the text before the first comma is used ("Austin, Texas" ->
        "austin"). An exact match wins, then the first record whose
        normalized name contains the query.
        """
        query = normalize_name(name.split(",")[0])
        if not query:
            return None
        exact = self.get_by_key(query)
        if exact is not None:
            return exact
        for record in self.records():
            if query in record.normalized_name:
                return record
        return None


class JsonBoundaryStore(BoundaryStore):

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else default_store_path()

    def _load(self) -> dict[str, dict]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"could not read {self.path}: {e}") from e

    def get_by_key(self, key: str) -> BoundaryRecord | None:
        data = self._load().get(key)
        return BoundaryRecord(**data) if data else None

    def records(self) -> list[BoundaryRecord]:
        return [BoundaryRecord(**data) for _, data in sorted(self._load().items())]

    def upsert(self, record: BoundaryRecord) -> None:
        data = self._load()
        data[record.normalized_name] = record.model_dump(mode="json")

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PersistenceError(str(e)) from e

        logger.info("Stored boundary %r at %s", record.normalized_name, self.path)
