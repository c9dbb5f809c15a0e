"""Thread-safe LRU memo for form evaluations.

Each form state is re-evaluated on every change of any field, and most
requests repeat a recent state. Entries are keyed on the raw field values
plus the synonym-table version, so loading a dataset never serves a result
computed against the old tables.
"""

import logging
import threading
from typing import Any

from cachetools import LRUCache

from vehicle_validation.models.vehicle import FormEvaluation, VehicleForm
from vehicle_validation.services.canonical import SynonymTables
from vehicle_validation.services.normalizer import evaluate_form
from vehicle_validation.services.validators import current_year

logger = logging.getLogger(__name__)


class EvaluationCache:
    """LRU cache in front of evaluate_form().

    Thread-safe via a threading.Lock: FastAPI runs sync endpoints in a
    worker pool.
    """

    def __init__(self, maxsize: int = 256) -> None:
        self._cache: LRUCache[tuple[Any, ...], FormEvaluation] = LRUCache(maxsize=maxsize)
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(
        form: VehicleForm, tables: SynonymTables, this_year: int
    ) -> tuple[Any, ...]:
        """Key on every input evaluate_form() reads.

        The current year is part of the key because the year upper bound
        moves at New Year.
        """
        return (
            form.plate,
            form.make,
            form.model,
            form.year,
            form.variant,
            id(tables),
            tables.version,
            this_year,
        )

    def evaluate(
        self,
        form: VehicleForm,
        tables: SynonymTables,
        this_year: int | None = None,
    ) -> FormEvaluation:
        """Return a memoized evaluation, computing it on a miss."""
        year = this_year if this_year is not None else current_year()
        key = self.make_key(form, tables, year)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self.hits += 1
                return cached
            self.misses += 1

        result = evaluate_form(form, tables, year)
        with self._lock:
            self._cache[key] = result
        logger.debug("Evaluation cache set: %s", key)
        return result

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
