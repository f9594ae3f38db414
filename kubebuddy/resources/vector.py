"""
Resource vectors.

A :class:`ResourceVector` maps free-form resource keys (``cores``, ``memory``,
``nvme``, ``gpu``, ``vram``, ``bandwidth_gbps`` or any deployment-defined key)
to numbers. It describes capacity, demand or availability.

Keys are not a fixed enum. A key missing from a vector means "cannot be
satisfied" in fit checks and "nothing to subtract" in subtraction.

Example:
    >>> total = ResourceVector({'cpu': 8, 'ram': 32})
    >>> total.minus({'cpu': 3})
    ResourceVector({'cpu': 5, 'ram': 32})
    >>> can_fit_resources({'cpu': 4}, {'cpu': 3})
    False
"""

from collections import UserDict
from typing import Any, Mapping, Optional
from kubebuddy.resources import numeric
from kubebuddy.resources.numeric import Number


class ResourceVector(UserDict):
    """
    Mapping of resource keys to int or float values.

    All arithmetic returns a new vector and uses the rules of
    :mod:`kubebuddy.resources.numeric`.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None, /, **kwargs: Any) -> None:
        super().__init__()
        if data is not None:
            self.update(data)
        if kwargs:
            self.update(kwargs)

    def __setitem__(self, key: str, value: Any) -> None:
        """
        Set a resource value.

        Raises:
            InvalidInputError: If the value is not numeric.
        """
        self.data[key] = numeric.as_number(value, key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.data!r})"

    def accumulate(self, key: str, value: Number) -> None:
        """
        Add `value` to the entry `key` in place.

        The stored numeric type follows the first value seen for the key.
        """
        numeric.as_number(value, key)
        if key in self.data:
            self.data[key] = numeric.add(self.data[key], value)
        else:
            self.data[key] = value

    def plus(self, other: Mapping[str, Number]) -> "ResourceVector":
        """ Return the sum of both vectors; keys of either side are kept. """
        result = ResourceVector(self.data)
        for key, value in other.items():
            result.accumulate(key, value)
        return result

    def minus(self, other: Mapping[str, Number]) -> "ResourceVector":
        """
        Subtract `other` from this vector.

        Only keys of this vector are surfaced; keys absent from `other` are kept
        unchanged and keys only present in `other` are ignored.
        """
        result = ResourceVector()
        for key, value in self.data.items():
            if key in other:
                result[key] = numeric.subtract(value, numeric.as_number(other[key], key))
            else:
                result[key] = value
        return result

    def scaled(self, factor: Number) -> "ResourceVector":
        """ Return a copy with every entry multiplied by `factor`. """
        return ResourceVector({key: numeric.scale(value, factor) for key, value in self.data.items()})

    def fits_within(self, available: Mapping[str, Number]) -> bool:
        """ Return True if this vector, taken as a requirement, fits in `available`. """
        return can_fit_resources(self, available)


def can_fit_resources(required: Mapping[str, Any], available: Mapping[str, Any]) -> bool:
    """
    Check whether required resources fit within available resources.

    Every required key must exist in `available` with a value greater than or
    equal to the requirement. Non-numeric requirements only need the key to exist.

    Args:
        required (Mapping): Required resources.
        available (Mapping): Available resources.

    Returns:
        bool: True if every requirement is satisfied.
    """
    for key, req in required.items():
        if key not in available:
            return False
        if not numeric.is_number(req):
            continue
        avail = available[key]
        if not numeric.is_number(avail) or req > avail:
            return False
    return True


def average_utilization(total: Mapping[str, Number], allocated: Mapping[str, Number]) -> float:
    """
    Mean of the per-key ``allocated / total`` ratios.

    Only keys with a positive total that also appear in `allocated` are
    considered; a resource nothing is allocated from does not dilute the mean.

    Args:
        total (Mapping): Total capacity.
        allocated (Mapping): Allocated resources.

    Returns:
        float: Average utilization, 0.0 when no key qualifies.
    """
    ratios = [
        numeric.ratio(allocated[key], value)
        for key, value in total.items()
        if key in allocated and numeric.is_number(value) and value > 0
    ]
    if not ratios:
        return 0.0
    return sum(ratios) / len(ratios)
