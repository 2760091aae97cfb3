"""
Session-scoped in-memory store of normalized benchmark records.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterator, Sequence, Tuple

from .models import BenchmarkRecord
from .normalizer import normalize

logger = logging.getLogger(__name__)


def read_document(path: str) -> Any:
    """Read the raw evaluation-results document from a JSON file."""
    logger.info(f"Reading evaluation results from {path}")

    path_obj = Path(path)
    if not path_obj.exists():
        raise FileNotFoundError(f"Evaluation results file not found: {path}")

    with open(path_obj, 'r', encoding='utf-8') as f:
        return json.load(f)


class BenchmarkStore:
    """Read-only record set, rebuilt whenever the raw document is (re)loaded."""

    def __init__(self, records: Sequence[BenchmarkRecord] = ()):
        self._records: Tuple[BenchmarkRecord, ...] = tuple(records)
        self._generation = 0

    @classmethod
    def from_document(cls, document: Any) -> "BenchmarkStore":
        store = cls()
        store.load(document)
        return store

    @property
    def records(self) -> Tuple[BenchmarkRecord, ...]:
        return self._records

    @property
    def generation(self) -> int:
        """Number of loads performed; changes every time the record set is replaced."""
        return self._generation

    def load(self, document: Any) -> int:
        """Replace the record set with the normalization of ``document``."""
        self._records = tuple(normalize(document))
        self._generation += 1
        logger.info(f"Store loaded {len(self._records)} records (generation {self._generation})")
        return len(self._records)

    def clear(self) -> None:
        self._records = ()
        self._generation += 1

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[BenchmarkRecord]:
        return iter(self._records)
