"""Brand/model canonicalization through static and learned synonym tables.

Canonicalization is a fast path: when a lookup misses, callers fall back to
fuzzy matching the raw input against the catalog.
"""

import re
from dataclasses import dataclass, field

from vehicle_validation.services.catalog import MAKE_SYNONYMS, MODEL_SYNONYMS

_KEY_STRIP = re.compile(r"[\s-]")


def normalize_key(text: str | None) -> str:
    """Lowercase and drop all whitespace and hyphens ("Mercedes-Benz" -> "mercedesbenz")."""
    return _KEY_STRIP.sub("", (text or "").lower())


@dataclass
class SynonymTables:
    """Synonym tables learned from an ingested dataset.

    ``makes`` maps a normalized user spelling to a canonical brand.
    ``models`` maps canonical brand -> normalized user spelling -> canonical
    model. Tables are only ever replaced as a whole; ``version`` is bumped on
    every replacement so memoized evaluations keyed on it go stale.
    """

    makes: dict[str, str] = field(default_factory=dict)
    models: dict[str, dict[str, str]] = field(default_factory=dict)
    version: int = 0

    def replace(self, makes: dict[str, str], models: dict[str, dict[str, str]]) -> None:
        self.makes = makes
        self.models = models
        self.version += 1

    def clear(self) -> None:
        self.replace({}, {})

    @property
    def model_count(self) -> int:
        return sum(len(brand_map) for brand_map in self.models.values())


def canonical_make(text: str | None, tables: SynonymTables | None = None) -> str | None:
    """Resolve a brand spelling, learned table first, then the static one."""
    key = normalize_key(text)
    if tables is not None and key in tables.makes:
        return tables.makes[key]
    return MAKE_SYNONYMS.get(key)


def canonical_model(
    text: str | None,
    tables: SynonymTables | None = None,
    brand: str = "",
) -> str | None:
    """Resolve a model spelling within ``brand``.

    Learned tables are keyed the same way as brands (normalize_key), the
    static table by lowercased trimmed text so "HR-V" and "e300 amg" keep
    their inner punctuation.
    """
    if tables is not None:
        brand_map = tables.models.get(brand, {})
        learned = brand_map.get(normalize_key(text))
        if learned:
            return learned
    return MODEL_SYNONYMS.get((text or "").lower().strip())
