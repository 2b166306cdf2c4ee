from typing import Optional, Sequence

from .exceptions import InvalidConfigurationError
from .models import CasePack


def items_per_casepack(size_ratios: Optional[Sequence[int]]) -> int:
    """
    Number of items in one casepack: the sum of its size ratios.

    Raises InvalidConfigurationError for a missing/empty ratio list or a
    non-positive total, since every later phase divides by this value.
    """
    if not size_ratios:
        raise InvalidConfigurationError("Casepack size ratios cannot be null or empty")

    total = sum(int(qty) for qty in size_ratios)
    if total <= 0:
        raise InvalidConfigurationError(f"Casepack size ratios must sum to a positive number, got {total}")
    return total


def first_casepack(case_packs: Optional[Sequence[CasePack]]) -> CasePack:
    """Only the first bundle of a request is sized; the rest are echoed untouched."""
    if not case_packs:
        raise InvalidConfigurationError("Casepacks cannot be null or empty")
    return case_packs[0]
