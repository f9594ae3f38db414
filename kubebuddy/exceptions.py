"""
KubeBuddy exceptions.

The capacity core degrades rather than fails: an unknown service or an
unplaceable workload is a valid (negative) planning outcome, not an error.
Exceptions are reserved for caller bugs, i.e. input that violates the
structure the core expects.
"""


class KubeBuddyException(Exception):
    """ Base class for all KubeBuddy exceptions. """
    pass


class InvalidInputError(KubeBuddyException):
    """
    Raised when the caller supplies malformed input.

    Examples are a plan request that fails validation, a ``min_buffer``
    outside ``[0, 1)`` or a non-numeric value inside a resource vector.
    Infeasible plans never raise this error.
    """
    pass
