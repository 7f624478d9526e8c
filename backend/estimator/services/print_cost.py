"""Silkscreen setup (plate) and print cost.

The rule tables are reached only through the ``PrintCostRules`` protocol so a
different pricing source can be plugged in; ``TablePrintCostRules`` reads the
tables shipped in ``PricingData``.
"""

import logging
from dataclasses import dataclass, fields
from typing import Dict, Iterable, List, Protocol, Sequence, Tuple

from estimator.models.cost import EstimateOptions
from estimator.models.domain import OrderDetail, PrintDesign, Product
from estimator.models.pricing import PricingData

logger = logging.getLogger(__name__)


@dataclass
class PrintCostBreakdown:
    """Un-rounded print cost components."""

    base: float = 0.0
    by_item: float = 0.0
    by_size: float = 0.0
    by_ink: float = 0.0
    by_location: float = 0.0
    by_plate_type: float = 0.0

    def add(self, other: "PrintCostBreakdown") -> None:
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(other, f.name))

    def total(self) -> float:
        return sum(getattr(self, f.name) for f in fields(self))


class PrintCostRules(Protocol):
    def setup_cost_for(self, design: PrintDesign, plate_groups: int) -> float:
        ...

    def covers(self, quantity: int) -> bool:
        """True when a print price exists for this production quantity."""
        ...

    def print_cost_for(self, design: PrintDesign, quantity: int) -> PrintCostBreakdown:
        ...

    def item_surcharge_for(self, product: Product) -> float:
        ...


class TablePrintCostRules:
    """Rule-table pricing (plate costs, quantity tiers, surcharges)."""

    def __init__(self, pricing: PricingData):
        self.pricing = pricing

    def _ink_cost(self, design: PrintDesign, charge: str) -> float:
        total = 0.0
        for ink in design.special_inks:
            option = self.pricing.special_ink_option(ink.type)
            if option is None:
                logger.warning("Unknown special ink type %s on design %s", ink.type, design.id)
                continue
            if option.charge == charge:
                total += option.cost * ink.count
        return total

    def setup_cost_for(self, design: PrintDesign, plate_groups: int) -> float:
        plate = self.pricing.plate_cost_for(design.size, design.plate_type)
        return plate.cost * design.colors * plate_groups + self._ink_cost(design, "setup")

    def covers(self, quantity: int) -> bool:
        return self.pricing.tier_for(quantity) is not None

    def print_cost_for(self, design: PrintDesign, quantity: int) -> PrintCostBreakdown:
        tier = self.pricing.tier_for(quantity)
        if tier is None:
            return PrintCostBreakdown()
        plate = self.pricing.plate_cost_for(design.size, design.plate_type)
        return PrintCostBreakdown(
            base=(tier.first_color + max(0, design.colors - 1) * tier.additional_color) * quantity,
            by_size=self.pricing.additional_print_costs_by_size.get(design.size, 0) * quantity,
            by_ink=self._ink_cost(design, "print") * quantity,
            by_location=self.pricing.additional_print_costs_by_location.get(design.location, 0) * quantity,
            by_plate_type=plate.surcharge_per_color * design.colors * quantity,
        )

    def item_surcharge_for(self, product: Product) -> float:
        return self.pricing.tag_surcharge(product.tags)


def count_plate_groups(
    items: Iterable[OrderDetail],
    products: Dict[str, Product],
    pricing: PricingData,
    privileged: bool = False,
) -> int:
    if privileged:
        return 1
    groups = set()
    for item in items:
        product = products.get(item.product_id)
        if product is not None and product.category_id:
            groups.add(pricing.plate_group_for(product.category_id))
    return max(1, len(groups))


def calculate_setup_cost(
    designs: Sequence[PrintDesign],
    plate_groups: int,
    rules: PrintCostRules,
) -> Tuple[float, Dict[str, float]]:
    """Total setup cost and the cost per design id."""
    detail: Dict[str, float] = {}
    for design in designs:
        if design.is_printable:
            detail[design.id] = rules.setup_cost_for(design, plate_groups)
    return sum(detail.values()), detail


def group_items_for_print(
    items: Iterable[OrderDetail],
    products: Dict[str, Product],
    pricing: PricingData,
) -> Dict[str, List[OrderDetail]]:
    groups: Dict[str, List[OrderDetail]] = {}
    for item in items:
        product = products.get(item.product_id)
        if product is None or not product.category_id:
            continue
        groups.setdefault(pricing.print_group_for(product.category_id), []).append(item)
    return groups


def _price_group(
    items: Sequence[OrderDetail],
    quantity: int,
    designs: Sequence[PrintDesign],
    products: Dict[str, Product],
    rules: PrintCostRules,
) -> PrintCostBreakdown:
    breakdown = PrintCostBreakdown()
    if quantity <= 0 or not rules.covers(quantity):
        return breakdown
    for item in items:
        product = products.get(item.product_id)
        if product is not None:
            breakdown.by_item += rules.item_surcharge_for(product) * item.quantity
    for design in designs:
        if design.is_printable:
            breakdown.add(rules.print_cost_for(design, quantity))
    return breakdown


def calculate_print_cost(
    designs: Sequence[PrintDesign],
    items: Sequence[OrderDetail],
    products: Dict[str, Product],
    pricing: PricingData,
    rules: PrintCostRules,
    options: EstimateOptions,
) -> PrintCostBreakdown:
    """Print cost for all silkscreen designs.

    Customers are priced per print group (categories sharing a price tier);
    admins and partners are priced as one group whose quantity may be
    overridden.
    """
    if options.is_privileged:
        quantity = options.print_quantity_override or sum(i.quantity for i in items)
        return _price_group(items, quantity, designs, products, rules)

    total = PrintCostBreakdown()
    for group_id, group_items in group_items_for_print(items, products, pricing).items():
        quantity = sum(i.quantity for i in group_items)
        logger.debug("Print group %s quantity=%d", group_id, quantity)
        total.add(_price_group(group_items, quantity, designs, products, rules))
    return total
