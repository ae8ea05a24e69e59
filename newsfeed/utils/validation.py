"""Shared validation utilities for the newsfeed client."""
from newsfeed.exceptions import ValidationError


def validate_page_number(page: int, field_name: str = "Page number") -> None:
    """
    Validate that a page number is a positive integer.

    :param page: 1-based page number
    :param field_name: Name of the field for error messages
    :raises ValidationError: If page is not an integer or is less than 1
    """
    if isinstance(page, bool) or not isinstance(page, int):
        raise ValidationError(f"{field_name} must be an integer")
    if page < 1:
        raise ValidationError(f"{field_name} must be at least 1")


def validate_non_negative(value: int | float, field_name: str) -> None:
    """
    Validate that a count or duration is not negative.

    :param value: Value to validate
    :param field_name: Name of the field for error messages
    :raises ValidationError: If value is negative
    """
    if value is None or value < 0:
        raise ValidationError(f"{field_name} cannot be negative")


def validate_retry_count(value: int, field_name: str = "max_retries") -> None:
    """
    Validate that a retry count is a non-negative integer.

    :param value: Number of attempts
    :param field_name: Name of the field for error messages
    :raises ValidationError: If value is not an integer or is negative
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer")
    validate_non_negative(value, field_name)
