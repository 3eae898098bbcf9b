"""
Declarative input validation.

A Validatable bundles a candidate value with its constraints:
    - required
    - min_length / max_length (text only)
    - min / max (numbers only)

Length bounds are ignored for numbers and numeric bounds are ignored for text.
"""
from dataclasses import dataclass
from typing import Optional, Union


@dataclass
class Validatable:
    value: Union[str, int, float]
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate(validatable: Validatable) -> bool:
    """Return True if the value satisfies every constraint set on it."""
    value = validatable.value
    is_valid = True

    if validatable.required:
        is_valid = is_valid and len(str(value).strip()) != 0

    if isinstance(value, str):
        if validatable.min_length is not None:
            is_valid = is_valid and len(value) >= validatable.min_length
        if validatable.max_length is not None:
            is_valid = is_valid and len(value) <= validatable.max_length

    if _is_number(value):
        if validatable.min is not None:
            is_valid = is_valid and value >= validatable.min
        if validatable.max is not None:
            is_valid = is_valid and value <= validatable.max

    return is_valid
