"""Typed pricing rule tables.

Each table exposes one lookup method with a fixed tie-break so callers never
reach into the raw JSON.
"""

from typing import Dict, Literal, Optional, Tuple

from pydantic import Field

from estimator.models.domain import CamelModel

DEFAULT_REGION = "DEFAULT"


class PrintSizeConstraint(CamelModel):
    type: Literal["location", "tag"]
    id: str
    sizes: Tuple[str, ...] = ()


class PrintPricingTier(CamelModel):
    min: int
    max: int
    first_color: float
    additional_color: float

    def covers(self, quantity: int) -> bool:
        return self.min <= quantity <= self.max


class PlateCost(CamelModel):
    cost: float = 0
    surcharge_per_color: float = 0


class SpecialInkOption(CamelModel):
    type: str
    display_name: str = ""
    cost: float = 0
    # "print": charged per printed piece, "setup": charged once per design
    charge: Literal["print", "setup"] = "print"


class ShippingRegion(CamelModel):
    cost: int = 0
    prefectures: Tuple[str, ...] = ()


class PricingData(CamelModel):
    print_size_constraints: Tuple[PrintSizeConstraint, ...] = ()
    category_print_locations: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)
    special_ink_options: Tuple[SpecialInkOption, ...] = ()
    plate_costs: Dict[str, PlateCost] = Field(default_factory=dict)
    print_pricing_tiers: Tuple[PrintPricingTier, ...] = ()
    additional_print_costs_by_size: Dict[str, float] = Field(default_factory=dict)
    additional_print_costs_by_location: Dict[str, float] = Field(default_factory=dict)
    additional_print_costs_by_tag: Dict[str, float] = Field(default_factory=dict)
    print_cost_category_combinations: Dict[str, str] = Field(default_factory=dict)
    plate_cost_category_combinations: Dict[str, str] = Field(default_factory=dict)
    shipping_costs: Dict[str, ShippingRegion] = Field(default_factory=dict)
    shipping_free_threshold: int = 0
    tax_rate: float = 0.10
    dtf_profit_margin: float = 2.0
    dtf_round_up_to_10: bool = True

    def location_size_constraint(self, location: str) -> Optional[PrintSizeConstraint]:
        """First location constraint for ``location``, if any."""
        for c in self.print_size_constraints:
            if c.type == "location" and c.id == location:
                return c
        return None

    def tag_size_constraints(self, tags) -> Tuple[PrintSizeConstraint, ...]:
        """All tag constraints matching any of ``tags``, in table order."""
        tag_set = set(tags)
        return tuple(c for c in self.print_size_constraints if c.type == "tag" and c.id in tag_set)

    def tier_for(self, quantity: int) -> Optional[PrintPricingTier]:
        """First tier whose [min, max] range contains ``quantity``."""
        for tier in self.print_pricing_tiers:
            if tier.covers(quantity):
                return tier
        return None

    def plate_cost_for(self, size: str, plate_type: str) -> PlateCost:
        return self.plate_costs.get(f"{size}-{plate_type or 'normal'}", PlateCost())

    def special_ink_option(self, ink_type: str) -> Optional[SpecialInkOption]:
        for opt in self.special_ink_options:
            if opt.type == ink_type:
                return opt
        return None

    def tag_surcharge(self, tags) -> float:
        return sum(self.additional_print_costs_by_tag.get(t, 0) for t in tags)

    def plate_group_for(self, category_id: str) -> str:
        return self.plate_cost_category_combinations.get(category_id) or category_id

    def print_group_for(self, category_id: str) -> str:
        return self.print_cost_category_combinations.get(category_id) or category_id

    def shipping_region_for(self, address: str) -> str:
        """Region whose prefecture list prefixes ``address``; ``DEFAULT`` otherwise."""
        if not address:
            return DEFAULT_REGION
        for region, info in self.shipping_costs.items():
            if any(address.startswith(p) for p in info.prefectures):
                return region
        return DEFAULT_REGION
