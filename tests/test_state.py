import pandas as pd

from supply_chain import initialize_state, simulate


def test_initialize_state_copies_storage_stock(single_dc_network):
    network, storage, _ = single_dc_network(initial=25.0)
    state = initialize_state(network)
    key = (storage, network.products[0])
    assert state.current_time == 0
    assert state.inventory == {key: 25.0}
    assert state.initial_inventory == {key: 25.0}
    assert state.inventory_history == {key: []}
    assert state.total_costs == 0.0 and state.revenue == 0.0


def test_state_changes_never_touch_storage(single_dc_network):
    network, storage, policies = single_dc_network(horizon=3, initial=25.0, demand=[20.0, 0, 0])
    simulate(network, policies)
    assert storage.initial_inventory[network.products[0]] == 25.0


def test_summary_and_frame(single_dc_network):
    network, storage, _ = single_dc_network(
        horizon=4, initial=50.0, holding=1.0, policy=None, demand=[30.0, 30.0, 10.0, 0.0]
    )
    state = simulate(network)
    summary = state.summary()
    assert summary["days"] == 4
    assert summary["lost_units"] == 30.0
    assert summary["fill_rate"] == 40.0 / 70.0
    assert summary["revenue"] == 40.0 * 15.0
    assert summary["holding_costs"] == 50.0 + 20.0 + 20.0 + 10.0
    assert summary["profit"] == state.revenue - state.total_costs

    frame = state.inventory_frame()
    assert isinstance(frame, pd.DataFrame)
    assert frame.index.name == "day"
    assert frame["DC / Widget"].tolist() == [50.0, 20.0, 20.0, 10.0]
    assert state.history_for(storage, network.products[0]) == [50.0, 20.0, 20.0, 10.0]
