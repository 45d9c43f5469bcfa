import pytest

from supply_chain import BaseStockPolicy, OrderingPolicy, SSPolicy


@pytest.mark.parametrize("inventory", [0.0, 10.0, 49.5, 50.0])
def test_ss_orders_up_to_S_at_or_below_reorder_point(inventory):
    policy = SSPolicy(50.0, 200.0)
    assert policy.calculate_order_quantity(inventory) == 200.0 - inventory


@pytest.mark.parametrize("inventory", [50.01, 120.0, 200.0, 350.0])
def test_ss_does_not_order_above_reorder_point(inventory):
    assert SSPolicy(50.0, 200.0).calculate_order_quantity(inventory) == 0.0


def test_ss_reorder_point_boundary_triggers():
    assert SSPolicy(s=5, S=6).calculate_order_quantity(5) == 1


@pytest.mark.parametrize("s, S", [(50.0, 50.0), (80.0, 20.0)])
def test_ss_rejects_order_up_to_not_above_reorder_point(s, S):
    with pytest.raises(ValueError):
        SSPolicy(s, S)


def test_base_stock_tops_up_every_day():
    policy = BaseStockPolicy(target=60.0)
    assert policy.calculate_order_quantity(59.0) == 1.0
    assert policy.calculate_order_quantity(60.0) == 0.0
    assert policy.calculate_order_quantity(75.0) == 0.0


def test_base_stock_rejects_negative_target():
    with pytest.raises(ValueError):
        BaseStockPolicy(-1.0)


def test_policies_share_interface():
    assert isinstance(SSPolicy(1, 2), OrderingPolicy)
    assert isinstance(BaseStockPolicy(5), OrderingPolicy)
    with pytest.raises(TypeError):
        OrderingPolicy()
