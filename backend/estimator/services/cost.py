"""Estimate totals: garments + setup + print (silkscreen and DTF) + shipping + tax."""

import logging
from typing import Optional, Sequence

from estimator.models.catalog import CatalogData
from estimator.models.cost import CostDetails, EstimateOptions, PrintCostDetail
from estimator.models.domain import CustomerInfo, OrderDetail, PrintDesign
from estimator.models.dtf import DtfPrintSettings
from estimator.services.dtf import calculate_dtf_print_cost
from estimator.services.garment import calculate_tshirt_cost
from estimator.services.money import round_yen
from estimator.services.print_cost import (
    PrintCostRules,
    TablePrintCostRules,
    calculate_print_cost,
    calculate_setup_cost,
    count_plate_groups,
)
from estimator.services.shipping import calculate_shipping_cost

logger = logging.getLogger(__name__)


def cost_per_piece(total: int, quantity: int) -> int:
    return round_yen(total / quantity) if quantity > 0 else 0


class CostCalculator:
    """Pure cost calculator; holds only read-only catalog data, safe to call repeatedly."""

    def __init__(self, catalog: CatalogData, rules: Optional[PrintCostRules] = None):
        self.catalog = catalog
        self.rules = rules or TablePrintCostRules(catalog.pricing)

    def calculate(
        self,
        items: Sequence[OrderDetail],
        designs: Sequence[PrintDesign],
        customer: Optional[CustomerInfo] = None,
        options: Optional[EstimateOptions] = None,
        dtf_print_settings: Optional[DtfPrintSettings] = None,
    ) -> CostDetails:
        customer = customer or CustomerInfo()
        options = options or EstimateOptions()
        pricing = self.catalog.pricing
        products = self.catalog.product_map

        total_quantity = sum(item.quantity for item in items)
        if total_quantity <= 0 and not options.print_quantity_override:
            return CostDetails.zero()

        tshirt_cost = calculate_tshirt_cost(items, options.is_bring_in_mode)

        silkscreen = [d for d in designs if not d.is_dtf]
        plate_groups = count_plate_groups(items, products, pricing, options.is_privileged)
        setup_total, setup_detail = calculate_setup_cost(silkscreen, plate_groups, self.rules)

        print_breakdown = calculate_print_cost(silkscreen, items, products, pricing, self.rules, options)

        dtf_quantity = total_quantity
        if options.is_privileged and options.print_quantity_override:
            dtf_quantity = options.print_quantity_override
        dtf_total, dtf_detail = calculate_dtf_print_cost(
            [d for d in designs if d.is_dtf],
            dtf_quantity,
            self.catalog.dtf,
            dtf_print_settings or self.catalog.dtf_print_settings,
            pricing,
        )

        setup_cost = round_yen(setup_total)
        print_cost = round_yen(print_breakdown.total() + dtf_total)
        total_cost = tshirt_cost + setup_cost + print_cost

        shipping_cost = calculate_shipping_cost(total_cost, customer, pricing)
        tax = round_yen(total_cost * pricing.tax_rate)

        labor = labor_unit_price(print_cost, setup_cost, total_quantity)
        bring_in_quantity = total_quantity if options.is_bring_in_mode else 0

        logger.debug(
            "Cost qty=%d tshirt=%d setup=%d print=%d shipping=%d tax=%d",
            total_quantity, tshirt_cost, setup_cost, print_cost, shipping_cost, tax,
        )
        return CostDetails(
            total_cost=total_cost,
            shipping_cost=shipping_cost,
            tax=tax,
            total_cost_with_tax=total_cost + tax + shipping_cost,
            cost_per_shirt=cost_per_piece(total_cost, total_quantity),
            tshirt_cost=tshirt_cost,
            setup_cost=setup_cost,
            print_cost=print_cost,
            labor_unit_price=labor,
            sales_unit_price=sales_unit_price(tshirt_cost, total_quantity, bring_in_quantity, labor),
            print_cost_detail=PrintCostDetail(
                base=round_yen(print_breakdown.base),
                by_dtf=round_yen(dtf_total),
                by_item=round_yen(print_breakdown.by_item),
                by_size=round_yen(print_breakdown.by_size),
                by_ink=round_yen(print_breakdown.by_ink),
                by_location=round_yen(print_breakdown.by_location),
                by_plate_type=round_yen(print_breakdown.by_plate_type),
            ),
            setup_cost_detail={k: round_yen(v) for k, v in setup_detail.items()},
            design_print_costs={k: round_yen(v) for k, v in dtf_detail.items()},
        )


def calculate_cost(
    items: Sequence[OrderDetail],
    designs: Sequence[PrintDesign],
    catalog: CatalogData,
    customer: Optional[CustomerInfo] = None,
    options: Optional[EstimateOptions] = None,
    rules: Optional[PrintCostRules] = None,
) -> CostDetails:
    return CostCalculator(catalog, rules).calculate(items, designs, customer, options)


def labor_unit_price(print_cost: int, setup_cost: int, quantity: int) -> int:
    """Processing fee (print + setup) per piece."""
    return cost_per_piece(print_cost + setup_cost, quantity)


def sales_unit_price(tshirt_cost: int, quantity: int, bring_in_quantity: int, labor: int) -> int:
    """Average garment price per sold piece plus the processing fee."""
    sold = quantity - bring_in_quantity
    if sold <= 0:
        return 0
    return round_yen(tshirt_cost / sold) + labor
