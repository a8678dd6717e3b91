"""
Input validation functions for ReadGap.

All validation functions follow the pattern:
1. Accept raw user input (string, int, etc.)
2. Normalize/clean the input
3. Validate against business rules
4. Return cleaned value or raise ValidationError
"""

import re

from readgap.core.models.questions import ENGLISH


class ValidationError(ValueError):
    """Raised when user input fails validation."""

    pass


SESSION_CODE_PATTERN = re.compile(r"^[1-9]\d{5}$")


# ============================================================================
# Session Code Validation
# ============================================================================


def validate_session_code(code: str | None) -> str:
    """
    Validate a six-digit class session code.

    Accepts surrounding whitespace and internal spaces ("123 456").

    Args:
        code: Raw session code input

    Returns:
        Six-digit code string

    Raises:
        ValidationError: If the code is not six digits
    """
    if code is None or not code.strip():
        raise ValidationError("Session code cannot be empty")

    cleaned = re.sub(r"\s", "", code)

    if not cleaned.isdigit():
        raise ValidationError("Session code must contain only digits")

    if not SESSION_CODE_PATTERN.match(cleaned):
        raise ValidationError("Session code must be exactly 6 digits")

    return cleaned


# ============================================================================
# Student Validation
# ============================================================================


def validate_student_name(name: str | None) -> str:
    """
    Validate and normalize a student's name.

    Collapses repeated whitespace. Allows letters (any script), spaces,
    hyphens, apostrophes and periods.

    Raises:
        ValidationError: If name is empty, too short/long, or has invalid characters
    """
    if name is None or not name.strip():
        raise ValidationError("Student name cannot be empty")

    cleaned = " ".join(name.split())

    if len(cleaned) < 2:
        raise ValidationError("Student name too short (minimum 2 characters)")

    if len(cleaned) > 100:
        raise ValidationError("Student name too long (maximum 100 characters)")

    if re.search(r"[^\w\s\-'.]", cleaned) or re.search(r"[\d_]", cleaned):
        raise ValidationError("Student name contains invalid characters")

    return cleaned


def validate_year_group(year_group: str | None) -> str:
    """
    Validate a UK-style year group.

    Accepts "Year 7", "year7", "Y7" or a bare "7" and normalizes to "Year N"
    for N in 1-13. Reception is accepted as "Reception".

    Raises:
        ValidationError: If the year group is not recognised
    """
    if year_group is None or not year_group.strip():
        raise ValidationError("Year group cannot be empty")

    cleaned = year_group.strip().lower()

    if cleaned in {"r", "reception"}:
        return "Reception"

    match = re.fullmatch(r"(?:year|y)?\s*(\d{1,2})", cleaned)
    if not match:
        raise ValidationError(f"Unrecognised year group: {year_group}")

    number = int(match.group(1))
    if not 1 <= number <= 13:
        raise ValidationError("Year group must be between 1 and 13")

    return f"Year {number}"


def validate_language_code(code: str | None) -> str:
    """
    Normalize a home-language code.

    Codes are lowercase words such as "spanish" or "polish". English ("en")
    is not a valid home-language code because it is the assessed baseline.

    Raises:
        ValidationError: If the code is empty, malformed, or English
    """
    if code is None or not code.strip():
        raise ValidationError("Language code cannot be empty")

    cleaned = code.strip().lower()

    if not re.fullmatch(r"[a-z][a-z\-]{1,29}", cleaned):
        raise ValidationError(f"Invalid language code: {code}")

    if cleaned in {ENGLISH, "english"}:
        raise ValidationError("Home language must be a language other than English")

    return cleaned
