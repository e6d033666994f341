"""Shared type definitions for pool records."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field


def validate_amount(value: Any) -> int:
    """Validate that a value is a non-negative integer amount.

    Accepts ints and decimal integer strings (token amounts are commonly
    serialized as strings to survive JSON number limits). Floats are refused
    so no rounding can sneak into reserves.

    Raises:
        ValueError: If value is not a non-negative integer
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be an integer, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        # Plain ASCII digits only: no sign, whitespace or underscores
        if not (value.isascii() and value.isdigit()):
            raise ValueError(f"Amount must be a decimal integer string: '{value}'")
        int_value = int(value)
    else:
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Amount cannot be negative: {value}")

    return int_value


# Opaque token identifier (contract address, symbol, ...)
Token = Annotated[str, Field(min_length=1)]

# Non-negative integer amount, int or decimal string on input
Amount = Annotated[
    int,
    BeforeValidator(validate_amount),
    Field(description="Non-negative integer token amount"),
]
