"""Zephyr Argument Validation Utilities

Presence, format and range checks applied to tool arguments before any
remote call is made. Every check raises on the first violation it finds.
"""
import logging
import re
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

logger = logging.getLogger(__name__)

PROJECT_KEY_PATTERN = r"^[A-Z][A-Z_0-9]+$"
PROJECT_ID_OR_KEY_PATTERN = r"^[A-Z][A-Z_0-9]+$|^\d+$"
TEST_CASE_KEY_PATTERN = r"^.+-T[0-9]+$"
NUMERIC_ID_PATTERN = r"^\d+$"

TEST_STEPS_PAGE_LIMIT = 100
MAX_STEPS_PER_REQUEST = 100


def require(value: Any, field: str, message: Optional[str] = None) -> None:
    """Raise if a required argument is missing or empty."""
    if value is None or (isinstance(value, (str, list, dict)) and len(value) == 0):
        raise ValidationError(message or f"{field} is required", field=field)


def validate_project_key(project_key: Optional[str], field: str = "project_key", required: bool = True) -> None:
    """Validate a Jira project key such as 'PROJ'."""
    if project_key is None and not required:
        return
    require(project_key, field)
    if not isinstance(project_key, str) or not re.match(PROJECT_KEY_PATTERN, project_key):
        raise ValidationError(
            f"Invalid {field} format. Must match pattern: [A-Z][A-Z_0-9]+",
            field=field
        )


def validate_project_id_or_key(project_id: Optional[str], field: str = "project_id") -> None:
    """Validate a project reference given as numeric ID or project key."""
    require(project_id, field)
    if not re.match(PROJECT_ID_OR_KEY_PATTERN, str(project_id)):
        raise ValidationError(
            f"Invalid {field} format. Must be a numeric ID or a project key matching [A-Z][A-Z_0-9]+",
            field=field
        )


def validate_test_case_key(test_case_key: Optional[str], field: str = "test_case_key") -> None:
    """Validate a test case key such as 'PROJ-T123'."""
    require(test_case_key, field)
    if not isinstance(test_case_key, str) or not re.match(TEST_CASE_KEY_PATTERN, test_case_key):
        raise ValidationError(
            f"Invalid {field} format. Must match pattern: [A-Z]+-T[0-9]+",
            field=field
        )


def validate_numeric_id(value: Any, field: str, required: bool = True) -> Optional[int]:
    """Validate a numeric ID given as an int or a digit string.

    Returns:
        The ID as an int, or None when optional and absent
    """
    if value is None and not required:
        return None
    require(value, field)
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field} format. Must be a numeric ID.", field=field)
    if isinstance(value, int):
        if value < 1:
            raise ValidationError(f"Invalid {field} format. Must be a positive integer.", field=field)
        return value
    if not isinstance(value, str) or not re.match(NUMERIC_ID_PATTERN, value):
        raise ValidationError(f"Invalid {field} format. Must be a numeric ID.", field=field)
    return int(value)


def validate_range(value: Any, field: str, minimum: int, maximum: Optional[int] = None) -> None:
    """Validate that an integer argument lies within [minimum, maximum]."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer", field=field)
    if value < minimum or (maximum is not None and value > maximum):
        bounds = f"between {minimum} and {maximum}" if maximum is not None else f"at least {minimum}"
        raise ValidationError(f"{field} must be {bounds}, got {value}", field=field)


def resolve_page(
    max_results: Optional[int],
    start_at: Optional[int],
    default_max_results: int,
    max_max_results: int
) -> dict:
    """Apply page defaults and bounds, returning Zephyr query parameters."""
    if max_results is None:
        max_results = default_max_results
    if start_at is None:
        start_at = 0
    validate_range(max_results, "max_results", 1, max_max_results)
    validate_range(start_at, "start_at", 0)
    return {"maxResults": max_results, "startAt": start_at}


def first_error(exc: PydanticValidationError, prefix: str = "") -> ValidationError:
    """Convert a pydantic validation failure into a single-field ValidationError.

    Only the first violation is reported.
    """
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    field = f"{prefix}{location}" if location else prefix.rstrip(".") or None
    logger.debug(f"Argument validation failed: {field}: {error.get('msg')}")
    return ValidationError(f"Invalid {field}: {error.get('msg')}", field=field)
