import logging
from typing import Dict, Mapping, Optional

from .exceptions import InvalidInputError

logger = logging.getLogger("Aggregator")


def require_mapping(values: Optional[Mapping[str, int]], name: str) -> Mapping[str, int]:
    if values is None:
        raise InvalidInputError(f"{name} cannot be null")
    return values


def total_positive_need(need_per_store: Mapping[str, int]) -> int:
    """Sum of strictly positive needs. Zero and negative needs add nothing."""
    return sum(need for need in need_per_store.values() if need > 0)


def effective_supply(warehouse_available_qty: Mapping[str, int]) -> Dict[str, int]:
    """
    Copy of the supply map with negative quantities clamped to zero.

    Input order is kept. A negative quantity is logged and treated as a
    warehouse with nothing to give.
    """
    supply = {}
    for warehouse, qty in warehouse_available_qty.items():
        if qty < 0:
            logger.warning(f"Warehouse {warehouse} reported negative supply ({qty}); treating as 0.")
            qty = 0
        supply[warehouse] = int(qty)
    return supply


def total_supply(warehouse_available_qty: Mapping[str, int]) -> int:
    return sum(max(0, qty) for qty in warehouse_available_qty.values())
