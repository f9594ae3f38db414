"""
Numeric semantics of resource values.

Resource values come from loosely typed data (YAML, JSON, vendor spec sheets)
and may be integral or fractional. Every component that does arithmetic on
resource values goes through the helpers of this module, so that aggregation,
allocation accounting, planning and reporting agree on the same rules:

- a value is an ``int`` or a ``float`` (``bool`` is rejected);
- the result of a binary operation keeps the numeric type of its left operand
  whenever this is lossless: ``int`` op ``float`` yields an ``int`` only if the
  exact result is integral, otherwise a ``float``;
- ``float`` op anything stays ``float``.

Example:
    >>> add(4, 2)
    6
    >>> add(4, 0.5)
    4.5
    >>> add(4, 2.0)
    6
    >>> subtract(8.0, 3)
    5.0
"""

from typing import Any, Optional, Union
from kubebuddy.exceptions import InvalidInputError

Number = Union[int, float]


def is_number(value: Any) -> bool:
    """ Return True if `value` is an int or a float (booleans excluded). """
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def as_number(value: Any, key: Optional[str] = None) -> Number:
    """
    Validate that `value` is a resource number.

    Args:
        value (Any): Value to check.
        key (str, optional): Resource key, used in the error message.

    Returns:
        Number: The value unchanged.

    Raises:
        InvalidInputError: If the value is not numeric.
    """
    if not is_number(value):
        where = f" for resource '{key}'" if key is not None else ""
        raise InvalidInputError(f"Resource value{where} must be a number, got {value!r}")
    return value


def _follow(first: Number, result: Number) -> Number:
    """ Keep the numeric type of `first` for `result` if no precision is lost. """
    if isinstance(first, int) and isinstance(result, float) and result.is_integer():
        return int(result)
    return result


def add(a: Number, b: Number) -> Number:
    """ Add two resource values. """
    return _follow(a, a + b)


def subtract(a: Number, b: Number) -> Number:
    """ Subtract `b` from `a`. """
    return _follow(a, a - b)


def scale(value: Number, factor: Number) -> Number:
    """ Multiply a resource value by a quantity or conversion factor. """
    return _follow(value, value * factor)


def normalize(value: Number) -> Number:
    """ Return `value` as an int when it is an integral float. """
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def ratio(part: Number, whole: Number) -> float:
    """ Return `part / whole` as a float; 0.0 when `whole` is not positive. """
    if whole <= 0:
        return 0.0
    return float(part) / float(whole)
