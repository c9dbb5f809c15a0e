"""Form evaluation, correction suggestions and the normalized payload.

The pipeline for one form state is:

    raw text -> canonical lookup -> best catalog match
             -> plate / year validation -> weighted confidence

Everything here is a pure function of the form and the synonym tables.
Accepting suggestions is a separate step (apply_fixes) layered on top.
"""

import logging
import re

from vehicle_validation.config import get_settings
from vehicle_validation.models.vehicle import (
    AcceptedFixes,
    FormEvaluation,
    Issue,
    NormalizedPayload,
    PayloadFlags,
    PlatePayload,
    SimilarityResult,
    VehicleForm,
)
from vehicle_validation.services.canonical import (
    SynonymTables,
    canonical_make,
    canonical_model,
)
from vehicle_validation.services.catalog import VEHICLE_CATALOG, all_models, models_for_make
from vehicle_validation.services.fuzzy import best_match
from vehicle_validation.services.validators import (
    clamp,
    sanitize_plate,
    suggest_year,
    validate_plate,
    validate_year,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Confidence weights (sum to 1.0)
# =============================================================================

BRAND_WEIGHT = 0.22
MODEL_WEIGHT = 0.26
PLATE_WEIGHT = 0.22
YEAR_WEIGHT = 0.20
TRIM_WEIGHT = 0.10

TRIM_PRESENT_SCORE = 0.8
TRIM_MISSING_SCORE = 0.4

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    return _WHITESPACE.sub(" ", (text or "").strip())


def aggregate_confidence(
    brand_score: float,
    model_score: float,
    plate_confidence: float,
    year_confidence: float,
    variant: str | None,
) -> float:
    """Weighted overall confidence, clamped to [0, 1].

    Trim is not fuzzy matched; it only counts as present or missing.
    """
    trim_score = TRIM_PRESENT_SCORE if variant else TRIM_MISSING_SCORE
    total = (
        brand_score * BRAND_WEIGHT
        + model_score * MODEL_WEIGHT
        + plate_confidence * PLATE_WEIGHT
        + year_confidence * YEAR_WEIGHT
        + trim_score * TRIM_WEIGHT
    )
    return clamp(total, 0, 1)


# =============================================================================
# Matching
# =============================================================================


def match_brand(make: str, tables: SynonymTables | None = None) -> SimilarityResult:
    """Best catalog brand for a raw brand spelling."""
    canon = canonical_make(make, tables) or make
    return best_match(canon, list(VEHICLE_CATALOG))


def match_model(
    model: str, brand: str, tables: SynonymTables | None = None
) -> SimilarityResult:
    """Best catalog model, restricted to ``brand`` when the brand is known."""
    canon = canonical_model(model, tables, brand) or model
    candidates = models_for_make(brand) or all_models()
    return best_match(canon, candidates)


# =============================================================================
# Evaluation
# =============================================================================


def evaluate_form(
    form: VehicleForm,
    tables: SynonymTables | None = None,
    this_year: int | None = None,
) -> FormEvaluation:
    """Derive every validation result for one form state."""
    settings = get_settings()

    brand = match_brand(form.make, tables)
    model = match_model(form.model, brand.match, tables)
    plate = validate_plate(form.plate)
    year = validate_year(form.year, this_year, min_year=settings.min_year)

    confidence = aggregate_confidence(
        brand.score, model.score, plate.confidence, year.confidence, form.variant
    )
    brand_ok = brand.score > settings.brand_accept_threshold
    model_ok = model.score > settings.model_accept_threshold

    issues: list[Issue] = []
    if not plate.ok:
        issues.append(
            Issue(field="plate", label="Plate format", suggestion=plate.display, tone="warn")
        )
    if not brand_ok:
        issues.append(
            Issue(field="make", label="Brand looks off", suggestion=brand.match, tone="bad")
        )
    if not model_ok:
        issues.append(
            Issue(field="model", label="Did you mean", suggestion=model.match, tone="warn")
        )
    if not year.ok:
        suggested = suggest_year(form.year, this_year, min_year=settings.min_year)
        issues.append(
            Issue(field="year", label="Year range", suggestion=str(suggested), tone="warn")
        )

    return FormEvaluation(
        brand=brand,
        model=model,
        plate=plate,
        year=year,
        confidence=confidence,
        brand_ok=brand_ok,
        model_ok=model_ok,
        issues=issues,
        form_valid=plate.ok and brand_ok and model_ok and year.ok,
    )


def apply_fixes(
    form: VehicleForm,
    evaluation: FormEvaluation,
    fields: list[str] | None = None,
    accepted: AcceptedFixes | None = None,
) -> tuple[VehicleForm, AcceptedFixes]:
    """Accept suggestions for ``fields`` (default: every open issue).

    Returns the corrected form and the updated acceptance flags. The input
    form is not modified.
    """
    updates: dict[str, str] = {}
    flags = (accepted or AcceptedFixes()).model_dump()
    for issue in evaluation.issues:
        if fields is not None and issue.field not in fields:
            continue
        updates[issue.field] = issue.suggestion
        flags[issue.field] = True

    if updates:
        logger.debug("Accepted fixes: %s", updates)
    return form.model_copy(update=updates), AcceptedFixes(**flags)


def build_payload(
    form: VehicleForm,
    evaluation: FormEvaluation,
    accepted: AcceptedFixes | None = None,
) -> NormalizedPayload:
    """Assemble the normalized record for a downstream backend."""
    accepted = accepted or AcceptedFixes()
    clean, display = sanitize_plate(form.plate)
    return NormalizedPayload(
        plate=PlatePayload(raw=form.plate, normalized=clean, display=display),
        brand=evaluation.brand.match,
        model=evaluation.model.match,
        year=evaluation.year.year,
        variant=normalize_text(form.variant),
        confidence=round(evaluation.confidence, 3),
        flags=PayloadFlags(
            plate_pattern_ok=evaluation.plate.ok,
            brand_auto_corrected=accepted.make,
            model_auto_corrected=accepted.model,
            year_auto_corrected=accepted.year,
        ),
    )
