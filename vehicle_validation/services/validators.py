"""Plate and year validation.

Validators never raise on bad input: a failed check is a normal outcome
returned as a result with a lowered confidence and a message for the user.
"""

import re
from datetime import date

from vehicle_validation.models.vehicle import PlateResult, YearResult

MIN_YEAR = 1980

PLATE_MAX_CONFIDENCE = 0.98
PLATE_VALID_CONFIDENCE = 0.95
PLATE_BASE_CONFIDENCE = 0.2
PLATE_PART_BONUS = 0.2

YEAR_VALID_CONFIDENCE = 0.98
YEAR_OUT_OF_RANGE_CONFIDENCE = 0.4
YEAR_MISSING_CONFIDENCE = 0.2

PLATE_HINT = "Plate should be 1-4 letters followed by 1-4 digits (e.g., WVY 1234)."
YEAR_HINT = "Enter a 4-digit year (e.g., 2019)."
VALID_MESSAGE = "Looks valid."

_NON_ALNUM = re.compile(r"[^A-Z0-9]")
_LETTERS_THEN_DIGITS = re.compile(r"([A-Z]+)(\d+)")
_PLATE_PATTERN = re.compile(r"^[A-Z]{1,4}[0-9]{1,4}$")
_PLATE_PREFIX = re.compile(r"^[A-Z]{1,4}")
_PLATE_SUFFIX = re.compile(r"\d{1,4}$")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def current_year() -> int:
    return date.today().year


# =============================================================================
# Plates
# =============================================================================


def sanitize_plate(raw: str | None) -> tuple[str, str]:
    """Return ``(clean, display)`` for a raw plate.

    Only the first letters-then-digits boundary gets a space, so irregular
    plates such as "AB12CD" come out as "AB 12CD".

    Examples:
        >>> sanitize_plate("wvy1234")
        ('WVY1234', 'WVY 1234')
        >>> sanitize_plate("qtr-88")
        ('QTR88', 'QTR 88')
    """
    clean = _NON_ALNUM.sub("", (raw or "").upper())
    display = _LETTERS_THEN_DIGITS.sub(r"\1 \2", clean, count=1)
    return clean, display


def validate_plate(raw: str | None) -> PlateResult:
    """Check a plate against the 1-4 letters + 1-4 digits format."""
    clean, display = sanitize_plate(raw)
    ok = bool(_PLATE_PATTERN.match(clean))

    confidence = PLATE_BASE_CONFIDENCE
    if _PLATE_PREFIX.match(clean):
        confidence += PLATE_PART_BONUS
    if _PLATE_SUFFIX.search(clean):
        confidence += PLATE_PART_BONUS
    if ok:
        confidence = PLATE_VALID_CONFIDENCE

    return PlateResult(
        ok=ok,
        confidence=clamp(confidence, 0, PLATE_MAX_CONFIDENCE),
        normalized=clean,
        display=display,
        message=VALID_MESSAGE if ok else PLATE_HINT,
    )


# =============================================================================
# Years
# =============================================================================


def parse_year(raw: str | int | None) -> int | None:
    """Parse the leading base-10 integer of ``raw``.

    Trailing garbage is ignored ("2019 model" -> 2019); no leading integer
    means None.
    """
    if raw is None:
        return None
    match = _INT_PREFIX.match(str(raw))
    if not match:
        return None
    return int(match.group(1))


def validate_year(
    raw: str | int | None,
    this_year: int | None = None,
    min_year: int = MIN_YEAR,
) -> YearResult:
    """Range-check a year against ``min_year``..``this_year`` (inclusive).

    ``this_year`` defaults to today's calendar year; pass it explicitly to
    pin the upper bound.
    """
    year = parse_year(raw) if raw else None
    if year is None:
        return YearResult(ok=False, confidence=YEAR_MISSING_CONFIDENCE, message=YEAR_HINT)

    max_year = this_year if this_year is not None else current_year()
    ok = min_year <= year <= max_year
    return YearResult(
        ok=ok,
        confidence=YEAR_VALID_CONFIDENCE if ok else YEAR_OUT_OF_RANGE_CONFIDENCE,
        year=year,
        message=VALID_MESSAGE if ok else f"Year should be between {min_year} and {max_year}.",
    )


def suggest_year(raw: str | None, this_year: int | None = None, min_year: int = MIN_YEAR) -> int:
    """Nearest in-range year for ``raw``; unparseable input suggests this year."""
    max_year = this_year if this_year is not None else current_year()
    year = parse_year(raw) if raw else None
    if not year:
        year = max_year
    return int(clamp(year, min_year, max_year))
