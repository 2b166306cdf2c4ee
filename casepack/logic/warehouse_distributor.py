"""
Warehouse Distributor
=====================
Spreads the total allocated casepacks back over the warehouses in
proportion to their capacity.

1. If everything was allocated, every warehouse is drained.
2. Otherwise each warehouse (ascending id) gets round-half-up of its
   proportional share, capped by its capacity and by what is still unassigned.
3. Whatever rounding left over is handed out one unit at a time, same
   order, to warehouses with spare capacity.
"""

import logging
from typing import Dict, Mapping

from .aggregator import effective_supply
from .exceptions import AllocationInvariantError

logger = logging.getLogger("WarehouseDistributor")


def round_half_up_ratio(numerator: int, denominator: int) -> int:
    """round(numerator / denominator) with halves rounded up, exact for non-negative ints."""
    return (2 * numerator + denominator) // (2 * denominator)


def distribute_warehouses(warehouse_available_qty: Mapping[str, int], total_allocated: int) -> Dict[str, int]:
    """
    Distribution map covering every warehouse, summing exactly to total_allocated.

    The returned dict follows the caller's key order; the computation itself
    walks warehouses in ascending id order so the result is reproducible.
    """
    supply = effective_supply(warehouse_available_qty)
    total_available = sum(supply.values())

    if total_allocated > total_available:
        logger.error(f"Allocated total {total_allocated} exceeds available supply {total_available}.")
        raise AllocationInvariantError(
            f"Allocated {total_allocated} casepacks but only {total_available} are available"
        )

    if total_allocated == total_available:
        logger.info(f"All {total_available} casepacks allocated. Draining every warehouse.")
        return dict(supply)

    order = sorted(supply)
    distributions = {warehouse: 0 for warehouse in supply}
    remaining = total_allocated

    for warehouse in order:
        capacity = supply[warehouse]
        share = round_half_up_ratio(capacity * total_allocated, total_available)
        share = min(share, capacity, remaining)
        distributions[warehouse] = share
        remaining -= share

    if remaining > 0:
        logger.debug(f"Fair-share pass left {remaining} casepacks. Reconciling round-robin.")

    while remaining > 0:
        placed = 0
        for warehouse in order:
            if remaining == 0:
                break
            if distributions[warehouse] < supply[warehouse]:
                distributions[warehouse] += 1
                remaining -= 1
                placed += 1
        if placed == 0:
            logger.error(f"No warehouse has spare capacity for the last {remaining} casepacks.")
            raise AllocationInvariantError(
                f"Cannot place {remaining} remaining casepacks: every warehouse is at capacity"
            )

    logger.info(f"Distributed {total_allocated} of {total_available} casepacks across {len(order)} warehouses.")
    return distributions
