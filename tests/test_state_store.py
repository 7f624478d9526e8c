from datetime import datetime

import pytest

from conftest import design, line
from estimator.errors import OrderValidationError, ReorderLockedError
from estimator.models.cost import EstimateOptions
from estimator.models.domain import CustomerInfo
from estimator.models.estimate import EstimatorState
from estimator.services.cost import calculate_cost
from estimator.services.state_store import EstimatorStore, generate_estimate_id


@pytest.fixture
def saved():
    return []


@pytest.fixture
def store(catalog, saved):
    return EstimatorStore(catalog, save=saved.append, state=EstimatorState(estimate_id="E1"))


def test_estimate_ids():
    now = datetime(2024, 5, 6, 7, 8, 9, 123456)
    assert generate_estimate_id(now) == "E20240506-070809123"
    assert generate_estimate_id(now, provisional=True) == "TBD20240506-070809"


class TestEditing:
    def test_every_change_is_saved(self, store, saved):
        store.add_item("p1", "ホワイト", "M", 2)
        store.add_item("p1", "ホワイト", "M", 3)
        store.set_customer(CustomerInfo(name_kanji="山田"))

        assert len(saved) == 3
        assert saved[-1] is store.state
        assert [(i.product_id, i.quantity, i.unit_price) for i in store.state.items] == [("p1", 5, 600)]

    def test_partner_price_is_fixed_when_added(self, store):
        store.set_options(EstimateOptions(is_partner_mode=True))
        store.set_partner_code("PARTNER-A")
        store.add_item("p1", "ホワイト", "M", 1)
        assert store.state.items[0].unit_price == 660  # list 1100 x 0.6

    def test_unknown_product(self, store, saved):
        with pytest.raises(OrderValidationError) as exc:
            store.add_item("nope", "ホワイト", "M", 1)
        assert exc.value.code == "unknownProduct"
        assert saved == []

    def test_customer_order_is_locked_to_the_first_brand(self, store, saved):
        store.add_order_detail(line("p1", "ホワイト", "M", 2, 600))
        with pytest.raises(OrderValidationError) as exc:
            store.add_order_detail(line("p2", "ナチュラル", "F", 1, 400))
        assert exc.value.code == "brandLocked"
        assert [i.product_id for i in store.state.items] == ["p1"]
        assert len(saved) == 1

    def test_admin_order_may_mix_brands(self, store):
        store.set_options(EstimateOptions(is_admin_mode=True))
        store.add_order_detail(line("p1", "ホワイト", "M", 2, 600))
        store.add_order_detail(line("p2", "ナチュラル", "F", 1, 400))
        assert [i.product_id for i in store.state.items] == ["p1", "p2"]

    def test_failed_save_keeps_the_previous_state(self, catalog):
        def refuse(_state):
            raise OSError("disk full")

        store = EstimatorStore(catalog, save=refuse, state=EstimatorState(estimate_id="E1"))
        with pytest.raises(OSError):
            store.add_order_detail(line("p1", "ホワイト", "M", 2, 600))
        assert store.state.items == ()

    def test_out_of_stock_selection_is_not_added(self, store, saved):
        with pytest.raises(OrderValidationError):
            store.add_item("p1", "ブラック", "M", 1)
        assert store.state.items == ()
        assert saved == []

    def test_quantity_and_removal(self, store):
        store.add_order_detail(line("p2", "ナチュラル", "F", 2, 400))
        store.add_order_detail(line("p3", "ホワイト", "M", 1, 2000))
        # sorted by product code: A050 before B200
        assert [i.product_id for i in store.state.items] == ["p3", "p2"]
        store.update_quantity(1, 4)
        assert [i.quantity for i in store.state.items] == [1, 4]
        store.remove_item(0)
        assert [i.product_id for i in store.state.items] == ["p2"]

    def test_designs(self, store):
        store.save_design(design("d1"))
        store.save_design(design("d2", location="back-center"))
        store.remove_design("d1")
        assert [d.id for d in store.state.designs] == ["d2"]

    def test_design_size_follows_the_items(self, store):
        store.save_design(design("d1", size="35x50"))
        assert store.state.designs[0].size == "35x50"

        store.add_order_detail(line("p2", "ナチュラル", "F", 1, 400))
        assert store.available_sizes("front-center") == ("10x10", "30x40")
        assert store.state.designs[0].size == "10x10"

    def test_saved_design_gets_an_allowed_size(self, store):
        store.add_order_detail(line("p2", "ナチュラル", "F", 1, 400))
        store.save_design(design("d1", size="35x50"))
        assert store.state.designs[0].size == "10x10"

        store.save_design(design("d2", location="back-center", size="30x40"))
        assert store.state.designs[1].size == "30x40"

    def test_reorder_keeps_design_sizes(self, store):
        store.save_design(design("d1", size="35x50"))
        store.set_options(EstimateOptions(is_reorder=True))
        store.add_order_detail(line("p2", "ナチュラル", "F", 1, 400))
        assert store.state.designs[0].size == "35x50"

    def test_reorder_designs_are_locked(self, store):
        store.save_design(design("d1"))
        store.set_options(EstimateOptions(is_reorder=True))

        with pytest.raises(ReorderLockedError):
            store.save_design(design("d2", location="back-center"))
        with pytest.raises(ReorderLockedError):
            store.remove_design("d1")
        assert [d.id for d in store.state.designs] == ["d1"]


class TestOpen:
    def test_restores_a_saved_state(self, catalog):
        snapshot = EstimatorState(estimate_id="E9", items=(line("p1", "ホワイト", "M", 3, 600),))
        store = EstimatorStore(catalog, load={"E9": snapshot}.get)
        assert store.open("E9") == snapshot

    def test_unknown_id_starts_empty(self, catalog):
        store = EstimatorStore(catalog, load=lambda _id: None)
        state = store.open("E10")
        assert state.estimate_id == "E10"
        assert state.items == ()


class TestDerived:
    def test_cost_matches_the_calculator(self, store, catalog):
        store.add_order_detail(line("p1", "ホワイト", "M", 10, 600))
        store.save_design(design("d1", colors=2))
        expected = calculate_cost(store.state.items, store.state.designs, catalog)
        assert store.cost() == expected
        assert store.cost().total_cost == 18500

    def test_available_sizes_and_locations(self, store):
        store.add_order_detail(line("p2", "ナチュラル", "F", 1, 400))
        assert store.available_sizes("front-center") == ("10x10", "30x40")
        assert [loc.location_id for loc in store.available_locations()] == ["front-center"]

        store.set_options(EstimateOptions(is_admin_mode=True))
        assert store.available_sizes("front-center") == ("10x10", "30x40", "35x50")
        assert len(store.available_locations()) == 4
