class CasepackError(ValueError):
    """Base class for errors raised by the casepack optimizer."""


class InvalidConfigurationError(CasepackError):
    """The casepack bundle definition cannot be used (missing, empty, or sums to zero)."""


class InvalidInputError(CasepackError):
    """A required mapping (store needs or warehouse supply) was not supplied."""


class AllocationInvariantError(RuntimeError):
    """Internal consistency check failed. Indicates a bug, not bad input."""
