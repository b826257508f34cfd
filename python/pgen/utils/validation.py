"""
Input validation utilities for PGen rules.
"""

from typing import Any, List, Optional, Tuple

# Inclusive bounds for the numeric rule fields; None means unbounded above.
WORDS_RANGE: Tuple[int, int] = (1, 10)
LENGTH_RANGE: Tuple[int, int] = (3, 9)
COUNT_RANGE: Tuple[int, Optional[int]] = (0, None)


def is_integer(value: Any) -> bool:
    """Check that a value is a real integer (bools are rejected)."""
    return isinstance(value, int) and not isinstance(value, bool)


def validate_range(name: str, value: Any, bounds: Tuple[int, Optional[int]]) -> Optional[str]:
    """
    Validate a single numeric field against inclusive bounds.

    Args:
        name: Field name used in the message
        value: The value to check
        bounds: (low, high) inclusive, high may be None

    Returns:
        Error message if invalid, None otherwise
    """
    low, high = bounds

    if not is_integer(value):
        return f"{name} must be an integer, got {value!r}"

    if value < low:
        return f"{name} must be at least {low}, got {value}"

    if high is not None and value > high:
        return f"{name} must be at most {high}, got {value}"

    return None


def get_rules_errors(words: Any, min_length: Any, max_length: Any,
                     digits_before: Any, digits_after: Any, amount: Any) -> List[str]:
    """
    Collect every problem with the numeric rule fields.

    Returns:
        List of error messages, empty when the values are valid
    """
    checks = [
        ("words", words, WORDS_RANGE),
        ("min_length", min_length, LENGTH_RANGE),
        ("max_length", max_length, LENGTH_RANGE),
        ("digits_before", digits_before, COUNT_RANGE),
        ("digits_after", digits_after, COUNT_RANGE),
        ("amount", amount, COUNT_RANGE),
    ]

    errors = []
    for name, value, bounds in checks:
        message = validate_range(name, value, bounds)
        if message:
            errors.append(message)

    # Only compare the lengths once both are known to be integers
    if is_integer(min_length) and is_integer(max_length) and min_length > max_length:
        errors.append(
            f"min_length ({min_length}) cannot be greater than max_length ({max_length})"
        )

    return errors
