import logging
from typing import Dict, Mapping, Optional, Sequence

from .aggregator import require_mapping, total_positive_need, total_supply
from .bundle_sizer import first_casepack, items_per_casepack
from .models import CasePack, OptimizationResult
from .store_allocator import StoreAllocator
from .warehouse_distributor import distribute_warehouses

logger = logging.getLogger("CasepackOptimizer")


class CasepackOptimizer:
    """
    Runs one optimization request end to end:
    bundle sizing -> aggregation -> store allocation -> warehouse distribution -> result.

    Holds no state between calls, so one instance can serve many threads.
    """

    def optimize(
        self,
        case_packs: Optional[Sequence[CasePack]],
        need_per_store: Optional[Mapping[str, int]],
        warehouse_available_qty: Optional[Mapping[str, int]],
    ) -> OptimizationResult:
        bundle = first_casepack(case_packs)
        per_casepack = items_per_casepack(bundle.size_ratios)

        need_per_store = require_mapping(need_per_store, "needPerStore")
        warehouse_available_qty = require_mapping(warehouse_available_qty, "warehouseAvailableQty")

        total_available_casepacks = total_supply(warehouse_available_qty)
        total_need = total_positive_need(need_per_store)

        logger.info(
            f"Items per casepack: {per_casepack}, Total available casepacks: {total_available_casepacks}, "
            f"Total available items: {total_available_casepacks * per_casepack}, Total need: {total_need}"
        )

        allocator = StoreAllocator(need_per_store, total_available_casepacks, per_casepack)
        stores = allocator.allocate()
        total_allocated = sum(stores.values())

        warehouses = distribute_warehouses(warehouse_available_qty, total_allocated)

        return assemble_result(
            case_packs=case_packs,
            stores=stores,
            warehouses=warehouses,
            total_available_casepacks=total_available_casepacks,
            items_per_casepack=per_casepack,
            total_need=total_need,
            targets=allocator.target_casepacks(),
        )


def assemble_result(
    case_packs: Sequence[CasePack],
    stores: Dict[str, int],
    warehouses: Dict[str, int],
    total_available_casepacks: int,
    items_per_casepack: int = 0,
    total_need: int = 0,
    targets: Optional[Dict[str, float]] = None,
) -> OptimizationResult:
    remaining_supply = total_available_casepacks - sum(stores.values())
    return OptimizationResult(
        case_packs=list(case_packs),
        stores=stores,
        warehouses=warehouses,
        remaining_supply=remaining_supply,
        items_per_casepack=items_per_casepack,
        total_need=total_need,
        targets=dict(targets or {}),
    )


def optimize_casepacks(
    case_packs: Optional[Sequence[CasePack]],
    need_per_store: Optional[Mapping[str, int]],
    warehouse_available_qty: Optional[Mapping[str, int]],
) -> OptimizationResult:
    return CasepackOptimizer().optimize(case_packs, need_per_store, warehouse_available_qty)
