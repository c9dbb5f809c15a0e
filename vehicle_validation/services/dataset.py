"""Labelled dataset ingestion, synonym learning and accuracy metrics.

A dataset is a CSV of user inputs next to the values they should resolve
to. Loading one rebuilds the learned synonym tables from scratch (no merge
with a previous dataset) and clears any metrics computed earlier.
"""

import io
import logging
import threading
import time
from typing import Any

import pandas as pd

from vehicle_validation.core.logging import log_dataset_event, log_error
from vehicle_validation.models.dataset import REQUIRED_COLUMNS, DatasetRow, Metrics
from vehicle_validation.models.vehicle import FormEvaluation, VehicleForm
from vehicle_validation.services.canonical import SynonymTables, normalize_key
from vehicle_validation.services.evaluation_cache import EvaluationCache
from vehicle_validation.services.normalizer import match_brand, match_model
from vehicle_validation.services.validators import validate_year

logger = logging.getLogger(__name__)


class DatasetError(ValueError):
    """Raised when a dataset cannot be read or lacks required columns."""


class DatasetReadError(DatasetError):
    """Raised when an uploaded file cannot be decoded as text."""


# =============================================================================
# Parsing
# =============================================================================


def _split_line(line: str) -> list[str]:
    """Tokenize one physical line into trimmed cells.

    An unbalanced quote is closed at the end of the line, so the open field
    takes the rest of it.
    """
    if line.count('"') % 2:
        line += '"'
    try:
        frame = pd.read_csv(
            io.StringIO(line),
            header=None,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            index_col=False,
        )
    except ValueError as e:
        raise DatasetError(f"Failed to parse CSV — {e}") from e

    if frame.empty:
        return []
    return [str(value).strip() for value in frame.iloc[0].tolist()]


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text into one dict per data row, keyed by header name.

    Every newline ends a row, including one inside quotes. Double-quoted
    fields may contain commas and ``""`` escapes. Headers and values are
    trimmed, blank lines skipped, short rows padded with "" and extra cells
    dropped. Every value stays a string (no NA or numeric inference).
    """
    lines = [line for line in text.replace("\r", "").split("\n") if line.strip()]
    if not lines:
        return []

    headers = _split_line(lines[0])
    rows = []
    for line in lines[1:]:
        cells = _split_line(line)
        rows.append(
            {header: cells[i] if i < len(cells) else "" for i, header in enumerate(headers)}
        )
    return rows


def learn_synonyms(
    rows: list[DatasetRow],
) -> tuple[dict[str, str], dict[str, dict[str, str]]]:
    """Derive brand and per-brand model synonym tables from labelled rows.

    Later rows overwrite earlier ones for the same normalized spelling.
    """
    makes: dict[str, str] = {}
    models: dict[str, dict[str, str]] = {}

    for row in rows:
        user_brand = normalize_key(row.user_input_brand)
        expected_brand = row.expected_brand.strip()
        if user_brand and expected_brand:
            makes[user_brand] = expected_brand

        user_model = normalize_key(row.user_input_model)
        expected_model = row.expected_model.strip()
        if expected_brand and user_model and expected_model:
            models.setdefault(expected_brand, {})[user_model] = expected_model

    return makes, models


# =============================================================================
# Session state
# =============================================================================


class DatasetSession:
    """Owner of all mutable state: loaded rows, learned tables and metrics.

    One dataset is held at a time. Loads, resets and every evaluation
    (dataset metrics or a single form) are serialized by a lock, so an
    evaluation always sees a fully applied dataset.
    """

    def __init__(self, cache_size: int = 256) -> None:
        self.rows: list[DatasetRow] = []
        self.tables = SynonymTables()
        self.metrics: Metrics | None = None
        self.error: str = ""
        self.evaluations = EvaluationCache(maxsize=cache_size)
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_bytes(self, data: bytes, encoding: str = "utf-8-sig") -> int:
        """Decode an uploaded file and load it. Returns the row count."""
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError as e:
            self.error = f"Failed to read file — {e}"
            log_error("Dataset upload could not be decoded", e)
            raise DatasetReadError(self.error) from e
        return self.load_text(text)

    def load_text(self, text: str) -> int:
        """Parse CSV text and load it. Returns the row count."""
        try:
            records = parse_csv(text)
        except DatasetError as e:
            self.error = str(e)
            log_error("Dataset parse failed", e)
            raise
        return self.load_rows(records)

    def load_rows(self, records: list[dict[str, Any]]) -> int:
        """Validate columns, replace the dataset and relearn synonym tables.

        Missing required columns reject the whole dataset and reset every
        piece of derived state.
        """
        start = time.time()
        columns = list(records[0].keys()) if records else []
        missing = [c for c in REQUIRED_COLUMNS if c not in columns]

        with self._lock:
            if missing:
                self._reset()
                self.error = f"CSV missing required columns. Found: {', '.join(columns)}"
                logger.warning("Dataset rejected, missing columns: %s", ", ".join(missing))
                raise DatasetError(self.error)

            rows = [
                DatasetRow(**{c: str(record.get(c) or "") for c in REQUIRED_COLUMNS})
                for record in records
            ]
            makes, models = learn_synonyms(rows)

            self.rows = rows
            self.tables.replace(makes, models)
            self.metrics = None
            self.error = ""

        log_dataset_event("load", len(rows), (time.time() - start) * 1000)
        logger.info(
            "Learned %d brand and %d model synonyms",
            len(self.tables.makes),
            self.tables.model_count,
        )
        return len(rows)

    def reset(self) -> None:
        with self._lock:
            self._reset()
        log_dataset_event("reset", 0)

    def _reset(self) -> None:
        self.rows = []
        self.tables.clear()
        self.metrics = None
        self.error = ""

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def evaluate(self, this_year: int | None = None) -> Metrics | None:
        """Re-run matching over every row and score it against the labels.

        Returns None (and clears metrics) when no dataset is loaded.
        """
        start = time.time()
        with self._lock:
            if not self.rows:
                self.metrics = None
                return None

            correct_make = correct_model = correct_year = 0
            for row in self.rows:
                brand = match_brand(row.user_input_brand, self.tables).match
                model = match_model(row.user_input_model, brand, self.tables).match
                year = validate_year(row.user_input_year, this_year).year

                if brand == row.expected_brand:
                    correct_make += 1
                if model == row.expected_model:
                    correct_model += 1
                if str(year or "") == row.expected_year:
                    correct_year += 1

            total = len(self.rows)
            self.metrics = Metrics(
                total=total,
                make_accuracy=correct_make / total,
                model_accuracy=correct_model / total,
                year_accuracy=correct_year / total,
            )

        log_dataset_event("evaluate", total, (time.time() - start) * 1000)
        return self.metrics

    def evaluate_form(self, form: VehicleForm, this_year: int | None = None) -> FormEvaluation:
        """Evaluate a form against this session's learned tables (memoized).

        Holds the session lock so a concurrent load cannot swap the tables
        between building the memo key and reading them.
        """
        with self._lock:
            return self.evaluations.evaluate(form, self.tables, this_year)

    def preview(self, limit: int = 10) -> list[DatasetRow]:
        return self.rows[:limit]
