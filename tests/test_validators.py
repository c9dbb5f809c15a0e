"""Tests for plate and year validation.

The year upper bound moves with the calendar, so every year test pins
``this_year`` explicitly.
"""

import pytest

from vehicle_validation.services.validators import (
    PLATE_HINT,
    YEAR_HINT,
    parse_year,
    sanitize_plate,
    suggest_year,
    validate_plate,
    validate_year,
)

THIS_YEAR = 2026

# ---------------------------------------------------------------------------
# Plates
# ---------------------------------------------------------------------------


class TestSanitizePlate:
    def test_lowercase_plate(self):
        assert sanitize_plate("wvy1234") == ("WVY1234", "WVY 1234")

    def test_strips_separators(self):
        assert sanitize_plate("qtr-88") == ("QTR88", "QTR 88")
        assert sanitize_plate(" jpb 7 ") == ("JPB7", "JPB 7")

    def test_only_first_boundary_is_spaced(self):
        assert sanitize_plate("ab12cd34") == ("AB12CD34", "AB 12CD34")

    def test_digits_first_left_unformatted_prefix(self):
        assert sanitize_plate("12wvy") == ("12WVY", "12WVY")

    def test_none_and_empty(self):
        assert sanitize_plate(None) == ("", "")
        assert sanitize_plate("") == ("", "")


class TestValidatePlate:
    def test_valid_plate(self):
        result = validate_plate("WVY 1234")
        assert result.ok is True
        assert result.confidence == 0.95
        assert result.normalized == "WVY1234"
        assert result.display == "WVY 1234"
        assert result.message == "Looks valid."

    def test_digits_before_letters(self):
        result = validate_plate("12WVY")
        assert result.ok is False
        assert result.confidence == pytest.approx(0.2)
        assert result.message == PLATE_HINT

    def test_letters_prefix_only(self):
        result = validate_plate("AB12CD")
        assert result.ok is False
        assert result.confidence == pytest.approx(0.4)

    def test_too_many_letters_gets_partial_credit(self):
        result = validate_plate("ABCDE1234")
        assert result.ok is False
        assert result.confidence == pytest.approx(0.6)

    def test_too_many_digits(self):
        assert validate_plate("AB12345").ok is False

    def test_empty(self):
        result = validate_plate("")
        assert result.ok is False
        assert result.confidence == pytest.approx(0.2)
        assert result.normalized == ""

    @pytest.mark.parametrize("raw", ["", "12WVY", "AB12CD", "WVY1234", "a1", "!!!"])
    def test_confidence_capped(self, raw):
        assert 0 <= validate_plate(raw).confidence <= 0.98


# ---------------------------------------------------------------------------
# Years
# ---------------------------------------------------------------------------


class TestParseYear:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("2019", 2019),
            (" 2019 ", 2019),
            ("2019abc", 2019),
            ("2019.7", 2019),
            (2015, 2015),
            ("abc", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_year(raw) == expected


class TestValidateYear:
    def test_valid_year(self):
        result = validate_year("2019", this_year=THIS_YEAR)
        assert result.ok is True
        assert result.confidence == 0.98
        assert result.year == 2019

    def test_too_old(self):
        result = validate_year("1900", this_year=THIS_YEAR)
        assert result.ok is False
        assert result.confidence == 0.4
        assert result.year == 1900
        assert result.message == f"Year should be between 1980 and {THIS_YEAR}."

    def test_empty(self):
        result = validate_year("", this_year=THIS_YEAR)
        assert result.ok is False
        assert result.confidence == 0.2
        assert result.year is None
        assert result.message == YEAR_HINT

    def test_not_a_number(self):
        result = validate_year("next year", this_year=THIS_YEAR)
        assert result.ok is False
        assert result.confidence == 0.2

    def test_bounds_are_inclusive(self):
        assert validate_year("1980", this_year=THIS_YEAR).ok is True
        assert validate_year(str(THIS_YEAR), this_year=THIS_YEAR).ok is True
        assert validate_year(str(THIS_YEAR + 1), this_year=THIS_YEAR).ok is False

    def test_upper_bound_moves_with_current_year(self):
        assert validate_year("2026", this_year=2025).ok is False
        assert validate_year("2026", this_year=2026).ok is True

    def test_defaults_to_calendar_year(self):
        assert validate_year("2000").ok is True


class TestSuggestYear:
    def test_clamps_old_year(self):
        assert suggest_year("1900", this_year=THIS_YEAR) == 1980

    def test_clamps_future_year(self):
        assert suggest_year("2099", this_year=THIS_YEAR) == THIS_YEAR

    def test_unparseable_suggests_current_year(self):
        assert suggest_year("abc", this_year=THIS_YEAR) == THIS_YEAR
        assert suggest_year("", this_year=THIS_YEAR) == THIS_YEAR
