"""
Casepack Data Classes
=====================
Plain containers passed between the optimizer phases. Everything is
created per request; nothing here is shared between calls.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class CasePack:
    """
    One bundle definition.

    Attributes:
        packs: Pack count supplied by the caller. Echoed back, never consulted.
        size_ratios: Item quantity per size, in the caller's order.
    """
    packs: int = 1
    size_ratios: Tuple[int, ...] = ()

    @classmethod
    def from_ratios(cls, ratios, packs: int = 1) -> "CasePack":
        return cls(packs=packs, size_ratios=tuple(int(q) for q in ratios))


@dataclass
class OptimizationResult:
    """Final payload handed back to the transport layer."""
    case_packs: List[CasePack]
    stores: Dict[str, int]
    warehouses: Dict[str, int]
    remaining_supply: int
    items_per_casepack: int = 0
    total_need: int = 0
    targets: Dict[str, float] = field(default_factory=dict)

    @property
    def total_allocated(self) -> int:
        return sum(self.stores.values())

    @property
    def total_available(self) -> int:
        return self.total_allocated + self.remaining_supply
