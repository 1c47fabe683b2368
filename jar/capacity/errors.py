"""
Capacity error kinds.

All capacity failures are local validation problems on in-memory values.
They are raised synchronously and never retried; the API and CLI surfaces
translate them using the `code` attribute.
"""


class CapacityError(ValueError):
    """Base class for capacity validation failures."""

    code = "capacity_error"


class InvalidCapacityProfile(CapacityError):
    """Raised when nominal hours or the overhead factor are unusable."""

    code = "invalid_capacity_profile"


class InvalidCommitment(CapacityError):
    """Raised when a commitment has an unknown bucket, bad hours or a bad date."""

    code = "invalid_commitment"


class DegenerateCapacity(CapacityError):
    """Raised when capacity collapses to zero and cannot be used as a divisor."""

    code = "degenerate_capacity"
