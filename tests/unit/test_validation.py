"""
Unit tests for input validation functions.
"""

import pytest

from readgap.core.validation import (
    ValidationError,
    validate_language_code,
    validate_session_code,
    validate_student_name,
    validate_year_group,
)

# ============================================================================
# Session Code Validation
# ============================================================================


class TestSessionCodeValidation:
    """Tests for six-digit session codes."""

    def test_valid_code(self):
        assert validate_session_code("482913") == "482913"

    def test_strips_whitespace(self):
        """Should accept codes read out with spaces."""
        assert validate_session_code("  482913 ") == "482913"
        assert validate_session_code("482 913") == "482913"

    def test_reject_empty(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_session_code("   ")

    def test_reject_none(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_session_code(None)

    def test_reject_letters(self):
        with pytest.raises(ValidationError, match="only digits"):
            validate_session_code("48A913")

    @pytest.mark.parametrize("code", ["12345", "1234567", "012345"])
    def test_reject_wrong_length_or_leading_zero(self, code):
        with pytest.raises(ValidationError, match="exactly 6 digits"):
            validate_session_code(code)

    def test_validation_error_is_value_error(self):
        """Pydantic validators turn ValueError into a 422, so this must subclass it."""
        assert issubclass(ValidationError, ValueError)


# ============================================================================
# Student Validation
# ============================================================================


class TestStudentNameValidation:
    def test_valid_name(self):
        assert validate_student_name("Amira Hassan") == "Amira Hassan"

    def test_collapses_whitespace(self):
        assert validate_student_name("  Jan   Kowalski ") == "Jan Kowalski"

    @pytest.mark.parametrize("name", ["O'Neill", "Anne-Marie", "J. Smith", "Zoë Łukasz", "محمد"])
    def test_accepts_punctuation_and_other_scripts(self, name):
        assert validate_student_name(name) == name

    def test_reject_empty(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_student_name("")

    def test_reject_too_short(self):
        with pytest.raises(ValidationError, match="too short"):
            validate_student_name("A")

    def test_reject_too_long(self):
        with pytest.raises(ValidationError, match="too long"):
            validate_student_name("A" * 101)

    @pytest.mark.parametrize("name", ["Sam123", "Sam_Jones", "Sam@School", "<script>"])
    def test_reject_invalid_characters(self, name):
        with pytest.raises(ValidationError, match="invalid characters"):
            validate_student_name(name)


class TestYearGroupValidation:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Year 7", "Year 7"),
            ("year7", "Year 7"),
            ("Y10", "Year 10"),
            ("3", "Year 3"),
            (" YEAR 13 ", "Year 13"),
            ("R", "Reception"),
            ("reception", "Reception"),
        ],
    )
    def test_normalizes(self, raw, expected):
        assert validate_year_group(raw) == expected

    @pytest.mark.parametrize("raw", ["0", "14", "Year 20"])
    def test_reject_out_of_range(self, raw):
        with pytest.raises(ValidationError, match="between 1 and 13"):
            validate_year_group(raw)

    @pytest.mark.parametrize("raw", ["Grade 5", "seven", "Y"])
    def test_reject_unrecognised(self, raw):
        with pytest.raises(ValidationError, match="Unrecognised"):
            validate_year_group(raw)

    def test_reject_empty(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_year_group(None)


class TestLanguageCodeValidation:
    def test_lowercases(self):
        assert validate_language_code(" Spanish ") == "spanish"

    def test_accepts_hyphenated(self):
        assert validate_language_code("brazilian-portuguese") == "brazilian-portuguese"

    @pytest.mark.parametrize("code", ["en", "EN", "English"])
    def test_reject_english(self, code):
        with pytest.raises(ValidationError, match="other than English"):
            validate_language_code(code)

    @pytest.mark.parametrize("code", ["x", "fr1", "es_ES", "-polish"])
    def test_reject_malformed(self, code):
        with pytest.raises(ValidationError, match="Invalid language code"):
            validate_language_code(code)
