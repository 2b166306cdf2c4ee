import random
import time

import pytest

from casepack.logic.exceptions import InvalidConfigurationError, InvalidInputError
from casepack.logic.models import CasePack
from casepack.logic.optimizer import CasepackOptimizer, assemble_result, optimize_casepacks


def bundle(*ratios):
    return [CasePack.from_ratios(ratios)]


def assert_conserved(result, supply):
    total_available = sum(max(0, q) for q in supply.values())
    total_allocated = sum(result.stores.values())

    assert total_allocated <= total_available
    assert sum(result.warehouses.values()) == total_allocated
    assert result.remaining_supply == total_available - total_allocated >= 0
    for warehouse, qty in result.warehouses.items():
        assert 0 <= qty <= max(0, supply[warehouse])


def test_exact_fit_scenario():
    supply = {"wh1": 15, "wh2": 10, "wh3": 12, "wh4": 6}
    result = optimize_casepacks(
        bundle(1, 4, 10),
        {"str1": 100, "str2": 150, "str3": 200, "str4": 250},
        supply,
    )

    assert result.items_per_casepack == 15
    assert result.total_need == 700
    assert sum(result.stores.values()) == 43
    assert result.remaining_supply == 0
    assert result.warehouses == supply
    assert_conserved(result, supply)


def test_surplus_scenario():
    supply = {"warehouse1": 100, "warehouse2": 50}
    result = optimize_casepacks(bundle(5), {"store1": 25, "store2": 50, "store3": 75}, supply)

    assert result.stores == {"store1": 5, "store2": 10, "store3": 15}
    assert result.remaining_supply == 120
    assert result.warehouses == {"warehouse1": 20, "warehouse2": 10}
    assert_conserved(result, supply)


def test_exact_match_scenario():
    supply = {"w1": 30, "w2": 30}
    result = optimize_casepacks(bundle(10), {"store1": 100, "store2": 200, "store3": 300}, supply)

    assert result.stores == {"store1": 10, "store2": 20, "store3": 30}
    assert result.remaining_supply == 0
    assert_conserved(result, supply)


def test_zero_need_leaves_supply_untouched():
    supply = {"wh1": 40, "wh2": 35}
    result = optimize_casepacks(bundle(1, 2, 3), {"closed1": 0, "closed2": -10}, supply)

    assert result.stores == {"closed1": 0, "closed2": 0}
    assert result.warehouses == {"wh1": 0, "wh2": 0}
    assert result.remaining_supply == 75


def test_empty_stores():
    result = optimize_casepacks(bundle(1, 2, 3), {}, {"warehouse1": 50})
    assert result.stores == {}
    assert result.warehouses == {"warehouse1": 0}
    assert result.remaining_supply == 50


def test_single_warehouse_supplies_everything():
    result = optimize_casepacks(bundle(1, 4, 10), {"store1": 100, "store2": 150}, {"onlyWarehouse": 30})
    assert result.warehouses["onlyWarehouse"] == sum(result.stores.values())


def test_negative_supply_is_ignored():
    supply = {"broken": -20, "wh": 10}
    result = optimize_casepacks(bundle(2), {"s1": 100}, supply)

    assert result.stores == {"s1": 10}
    assert result.warehouses == {"broken": 0, "wh": 10}
    assert result.remaining_supply == 0


def test_only_first_bundle_is_used_and_all_are_echoed():
    packs = [CasePack.from_ratios([10]), CasePack(packs=3, size_ratios=(1,))]
    result = optimize_casepacks(packs, {"s": 100}, {"w": 50})

    assert result.items_per_casepack == 10
    assert result.stores == {"s": 10}
    assert result.case_packs == packs


@pytest.mark.parametrize("ratios", [
    [1], [5], [1, 2], [1, 4, 12], [2, 3, 4, 5], [1, 10, 100], [7, 14, 21, 28],
])
def test_various_size_ratios(ratios):
    supply = {"warehouse1": 50, "warehouse2": 40}
    result = optimize_casepacks(bundle(*ratios), {"store1": 100, "store2": 200, "store3": 300}, supply)
    assert_conserved(result, supply)


def test_many_stores_and_warehouses():
    stores = {f"store{i}": i * 50 for i in range(1, 21)}
    warehouses = {f"warehouse{i}": i * 100 for i in range(1, 6)}
    result = optimize_casepacks(bundle(1, 3, 5, 7), stores, warehouses)

    assert len(result.stores) == 20
    assert len(result.warehouses) == 5
    assert list(result.stores) == list(stores)
    assert_conserved(result, warehouses)


def test_identical_inputs_give_identical_outputs():
    rng = random.Random(7)
    stores = {f"s{i}": rng.choice([0, 10, 10, 25, 40]) for i in range(60)}
    warehouses = {f"w{i}": rng.randint(0, 9) for i in range(12)}

    first = optimize_casepacks(bundle(3, 4), stores, warehouses)
    second = optimize_casepacks(bundle(3, 4), dict(stores), dict(warehouses))
    assert first.stores == second.stores
    assert first.warehouses == second.warehouses
    assert_conserved(first, warehouses)


def test_missing_inputs_are_rejected():
    optimizer = CasepackOptimizer()
    with pytest.raises(InvalidConfigurationError):
        optimizer.optimize(None, {"s": 1}, {"w": 1})
    with pytest.raises(InvalidConfigurationError):
        optimizer.optimize([CasePack()], {"s": 1}, {"w": 1})
    with pytest.raises(InvalidInputError):
        optimizer.optimize(bundle(1), None, {"w": 1})
    with pytest.raises(InvalidInputError):
        optimizer.optimize(bundle(1), {"s": 1}, None)


def test_large_scale_performance():
    rng = random.Random(42)
    stores = {f"store{i}": rng.randint(100, 1099) for i in range(1, 1001)}
    warehouses = {f"warehouse{i}": rng.randint(50, 549) for i in range(1, 101)}

    start = time.perf_counter()
    result = optimize_casepacks(bundle(1, 5, 10, 25), stores, warehouses)
    elapsed = time.perf_counter() - start

    assert len(result.stores) == 1000
    assert len(result.warehouses) == 100
    assert_conserved(result, warehouses)
    assert elapsed < 1.0


def test_large_scale_supply_constrained_performance():
    rng = random.Random(42)
    stores = {f"store{i}": rng.randint(1000, 5000) for i in range(1, 3001)}
    warehouses = {f"warehouse{i}": rng.randint(100, 300) for i in range(1, 201)}

    start = time.perf_counter()
    result = optimize_casepacks(bundle(1, 2), stores, warehouses)
    elapsed = time.perf_counter() - start

    assert result.remaining_supply == 0
    assert_conserved(result, warehouses)
    assert elapsed < 1.0


def test_assemble_result_derives_remaining_supply():
    packs = bundle(2, 3)
    result = assemble_result(
        packs,
        stores={"a": 4, "b": 1},
        warehouses={"w": 5},
        total_available_casepacks=9,
        items_per_casepack=5,
        total_need=30,
    )

    assert result.remaining_supply == 4
    assert result.total_available == 9
    assert result.items_per_casepack == 5
    assert result.total_need == 30
    assert result.targets == {}
    assert result.case_packs == packs
    assert result.case_packs is not packs
