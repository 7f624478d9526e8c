from typing import Dict, Optional

from pydantic import Field

from estimator.models.domain import CamelModel


class EstimateOptions(CamelModel):
    is_admin_mode: bool = False
    is_partner_mode: bool = False
    override_print_quantity: Optional[int] = None
    is_reorder: bool = False
    is_bring_in_mode: bool = False

    @property
    def is_privileged(self) -> bool:
        return self.is_admin_mode or self.is_partner_mode

    @property
    def print_quantity_override(self) -> int:
        """Admin override for the print quantity, 0 when not set."""
        if self.override_print_quantity and self.override_print_quantity > 0:
            return self.override_print_quantity
        return 0


class PrintCostDetail(CamelModel):
    base: int = 0
    by_dtf: int = 0
    by_item: int = 0
    by_size: int = 0
    by_ink: int = 0
    by_location: int = 0
    by_plate_type: int = 0


class CostDetails(CamelModel):
    total_cost: int = 0
    shipping_cost: int = 0
    tax: int = 0
    total_cost_with_tax: int = 0
    cost_per_shirt: int = 0
    tshirt_cost: int = 0
    setup_cost: int = 0
    print_cost: int = 0
    labor_unit_price: int = 0
    sales_unit_price: int = 0
    print_cost_detail: PrintCostDetail = Field(default_factory=PrintCostDetail)
    setup_cost_detail: Dict[str, int] = Field(default_factory=dict)
    design_print_costs: Dict[str, int] = Field(default_factory=dict)

    @classmethod
    def zero(cls) -> "CostDetails":
        return cls()
