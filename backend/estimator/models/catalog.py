"""Catalog snapshot supplied by the admin tools (read-only)."""

from typing import Dict, Optional, Tuple

from pydantic import Field

from estimator.models.domain import (
    BrandColor,
    CamelModel,
    PartnerCode,
    PrintLocation,
    PrintSizeInfo,
    Product,
    SizeName,
    SizeOrder,
)
from estimator.models.dtf import DtfData, DtfPrinter, DtfPrintSettings, DtfPrintSpeed
from estimator.models.pricing import PricingData


class CatalogData(CamelModel):
    products: Tuple[Product, ...] = ()
    colors: Dict[str, Dict[str, BrandColor]] = Field(default_factory=dict)
    sizes: Dict[str, Dict[str, SizeName]] = Field(default_factory=dict)
    stock: Dict[str, int] = Field(default_factory=dict)
    pricing: PricingData = Field(default_factory=PricingData)
    print_locations: Tuple[PrintLocation, ...] = ()
    print_sizes: Tuple[PrintSizeInfo, ...] = ()
    size_order: Tuple[SizeOrder, ...] = ()
    partner_codes: Tuple[PartnerCode, ...] = ()
    dtf: DtfData = Field(default_factory=DtfData)
    dtf_print_settings: DtfPrintSettings = Field(default_factory=DtfPrintSettings)
    dtf_printers: Tuple[DtfPrinter, ...] = ()
    dtf_print_speeds: Tuple[DtfPrintSpeed, ...] = ()

    @property
    def product_map(self) -> Dict[str, Product]:
        return {p.id: p for p in self.products}

    @property
    def size_order_map(self) -> Dict[str, int]:
        return {s.size_name: s.sort_order for s in self.size_order}

    @property
    def all_print_sizes(self) -> Tuple[str, ...]:
        return tuple(s.size_id for s in self.print_sizes)

    def partner(self, code: Optional[str]) -> Optional[PartnerCode]:
        if not code:
            return None
        return next((p for p in self.partner_codes if p.code == code), None)
