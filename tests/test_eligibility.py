import pytest

from conftest import design, line
from estimator.errors import OrderValidationError
from estimator.services.eligibility import (
    allowed_brand,
    available_locations_for,
    available_sizes_for,
    check_brand_allowed,
    coerce_design_size,
    products_in_order,
)

ALL_SIZES = ("10x10", "30x40", "35x50")


class TestAvailableSizes:
    def test_privileged_mode_allows_every_size(self, product_map, pricing):
        products = [product_map["p2"]]
        assert available_sizes_for("back-neck", products, pricing, ALL_SIZES, privileged=True) == ALL_SIZES

    def test_no_constraint_allows_every_size(self, product_map, pricing):
        assert available_sizes_for("front-center", [product_map["p1"]], pricing, ALL_SIZES) == ALL_SIZES

    def test_location_constraint(self, pricing):
        assert available_sizes_for("back-neck", [], pricing, ALL_SIZES) == ("10x10",)

    def test_tag_constraint(self, product_map, pricing):
        assert available_sizes_for("front-center", [product_map["p2"]], pricing, ALL_SIZES) == ("10x10", "30x40")

    def test_all_tags_of_a_product_are_intersected(self, product_map, pricing):
        # p3 carries both "heavy" and "small-print"
        assert available_sizes_for("front-center", [product_map["p3"]], pricing, ALL_SIZES) == ("30x40",)

    def test_products_are_intersected(self, product_map, pricing):
        products = [product_map["p2"], product_map["p3"]]
        assert available_sizes_for("front-center", products, pricing, ALL_SIZES) == ("30x40",)

    def test_empty_intersection_is_returned_as_is(self, product_map, pricing):
        assert available_sizes_for("back-neck", [product_map["p3"]], pricing, ALL_SIZES) == ()

    def test_coerce_moves_design_to_first_available_size(self):
        d = design("a", size="35x50")
        assert coerce_design_size(d, ("10x10", "30x40"), ALL_SIZES).size == "10x10"
        assert coerce_design_size(d, ("35x50",), ALL_SIZES) is d


class TestAvailableLocations:
    def test_category_without_rule_allows_everything(self, product_map, pricing, catalog):
        items = [line("p1", "ホワイト", "M", 1)]
        result = available_locations_for(items, product_map, pricing, catalog.print_locations)
        assert result == catalog.print_locations

    def test_category_rule_restricts_locations(self, product_map, pricing, catalog):
        items = [line("p2", "ナチュラル", "F", 1)]
        result = available_locations_for(items, product_map, pricing, catalog.print_locations)
        assert [loc.location_id for loc in result] == ["front-center"]

    def test_union_of_defined_rules_only(self, product_map, pricing, catalog):
        items = [line("p1", "ホワイト", "M", 1), line("p2", "ナチュラル", "F", 1)]
        result = available_locations_for(items, product_map, pricing, catalog.print_locations)
        assert [loc.location_id for loc in result] == ["front-center"]

    def test_empty_rule_blocks_printing(self, product_map, pricing, catalog):
        items = [line("p4", "ナチュラル", "F", 1)]
        assert available_locations_for(items, product_map, pricing, catalog.print_locations) == ()

    def test_privileged_and_empty_orders_allow_everything(self, product_map, pricing, catalog):
        items = [line("p4", "ナチュラル", "F", 1)]
        locations = catalog.print_locations
        assert available_locations_for(items, product_map, pricing, locations, privileged=True) == locations
        assert available_locations_for([], product_map, pricing, locations) == locations


def test_products_in_order_are_distinct_and_ordered(product_map):
    items = [line("p2", "ナチュラル", "F", 1), line("p1", "ホワイト", "M", 1), line("p2", "ナチュラル", "F", 2)]
    assert [p.id for p in products_in_order(items, product_map)] == ["p2", "p1"]


def test_allowed_brand(product_map):
    items = [line("p1", "ホワイト", "M", 1)]
    assert allowed_brand(items, product_map) == "United Athle"
    assert allowed_brand(items, product_map, privileged=True) is None
    assert allowed_brand([], product_map) is None


def test_check_brand_allowed(product_map):
    items = [line("p1", "ホワイト", "M", 1)]
    check_brand_allowed(items, product_map["p1"], product_map)
    check_brand_allowed(items, product_map["p2"], product_map, privileged=True)
    check_brand_allowed([], product_map["p2"], product_map)
    with pytest.raises(OrderValidationError) as exc:
        check_brand_allowed(items, product_map["p2"], product_map)
    assert exc.value.code == "brandLocked"
