"""
Store Allocator
===============
Turns aggregate supply/demand into whole-casepack allocations per store.

Phase A computes each store's fair-share target in items:
    - supply-constrained (available items < total need): need * available / total_need
    - otherwise: the need itself
Phase B hands out casepacks one at a time to the store whose remaining
target is largest, until the casepacks run out or every target is met.

Targets are exact integers scaled by total_need (in the constrained case).
Ties go to the lexicographically smallest store id.
"""

import heapq
import logging
from typing import Dict, List, Mapping, Tuple

from .aggregator import total_positive_need

logger = logging.getLogger("StoreAllocator")


class StoreAllocator:
    def __init__(self, need_per_store: Mapping[str, int], total_available_casepacks: int, items_per_casepack: int):
        self.need_per_store = dict(need_per_store)
        self.total_available_casepacks = total_available_casepacks
        self.items_per_casepack = items_per_casepack
        self.total_available_items = total_available_casepacks * items_per_casepack
        self.total_need = total_positive_need(self.need_per_store)

        # Remaining target of store s, in items, is scaled_targets[s] / scale
        self.scale = 1
        self.scaled_targets: Dict[str, int] = {}
        self._compute_targets()

    @property
    def is_supply_constrained(self) -> bool:
        return self.total_available_items < self.total_need

    def _compute_targets(self):
        if self.total_need == 0:
            return

        constrained = self.is_supply_constrained
        if constrained:
            self.scale = self.total_need

        for store, need in self.need_per_store.items():
            if need <= 0:
                self.scaled_targets[store] = 0
            elif constrained:
                self.scaled_targets[store] = need * self.total_available_items
            else:
                self.scaled_targets[store] = need

    def target_casepacks(self) -> Dict[str, float]:
        """Phase A target of every store, expressed in (fractional) casepacks."""
        step = self.items_per_casepack * self.scale
        return {
            store: self.scaled_targets.get(store, 0) / step
            for store in self.need_per_store
        }

    def allocate(self) -> Dict[str, int]:
        allocations = {store: 0 for store in self.need_per_store}

        if self.total_need == 0:
            logger.info("Total positive need is 0. Every store receives 0 casepacks.")
            return allocations

        mode = "fair share" if self.is_supply_constrained else "full need"
        logger.debug(f"Store targets computed ({mode}) for {len(self.scaled_targets)} stores.")

        remaining_casepacks = self.total_available_items // self.items_per_casepack
        step = self.items_per_casepack * self.scale

        # Max-heap on remaining target; equal targets pop in ascending store id
        heap: List[Tuple[int, str]] = [
            (-target, store) for store, target in self.scaled_targets.items() if target > 0
        ]
        heapq.heapify(heap)

        while remaining_casepacks > 0 and heap:
            neg_target, store = heap[0]
            allocations[store] += 1
            remaining_casepacks -= 1

            left = -neg_target - step
            if left > 0:
                heapq.heapreplace(heap, (-left, store))
            else:
                heapq.heappop(heap)

        logger.info(
            f"Allocated {sum(allocations.values())} of {self.total_available_casepacks} casepacks "
            f"across {len(allocations)} stores ({mode})."
        )
        return allocations


def allocate_stores(need_per_store: Mapping[str, int], total_available_casepacks: int, items_per_casepack: int) -> Dict[str, int]:
    """Convenience wrapper: allocation map covering every store in need_per_store."""
    return StoreAllocator(need_per_store, total_available_casepacks, items_per_casepack).allocate()
