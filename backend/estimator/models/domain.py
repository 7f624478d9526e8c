"""Order, design and catalog value objects.

All models are frozen; "updates" go through ``model_copy(update=...)``.
Field names are camelCase on the wire to match the catalog export and the
estimator front-end.
"""

from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PlateType = Literal["normal", "decomposition"]
PrintMethod = Literal["silkscreen", "dtf"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SpecialInkDetail(CamelModel):
    type: str
    count: int = Field(1, ge=1)


class PrintDesign(CamelModel):
    id: str
    location: str = ""
    size: str = ""
    colors: int = 1
    special_inks: Tuple[SpecialInkDetail, ...] = ()
    plate_type: PlateType = "normal"
    print_method: PrintMethod = "silkscreen"
    # DTF only
    width_cm: Optional[float] = None
    height_cm: Optional[float] = None

    @property
    def special_ink_count(self) -> int:
        return sum(ink.count for ink in self.special_inks)

    @property
    def is_dtf(self) -> bool:
        return self.print_method == "dtf"

    @property
    def is_printable(self) -> bool:
        """True when a silkscreen design has enough data to be priced."""
        return not self.is_dtf and bool(self.location) and self.colors > 0


class OrderDetail(CamelModel):
    product_id: str
    product_name: str = ""
    color: str
    size: str
    quantity: int = Field(..., ge=1)
    unit_price: int = Field(0, ge=0)

    def same_line(self, other: "OrderDetail") -> bool:
        return (self.product_id, self.color, self.size) == (other.product_id, other.color, other.size)


class ProductPrice(CamelModel):
    color: str  # colour type, e.g. "ホワイト" / "カラー"
    size: str
    price: int = 0
    list_price: float = 0
    purchase_price: float = 0


class Product(CamelModel):
    id: str
    code: str
    name: str
    variant_name: str = ""
    brand: str
    category_id: str = ""
    tags: Tuple[str, ...] = ()
    colors: Tuple[str, ...] = ()
    prices: Tuple[ProductPrice, ...] = ()
    jan_code: str = Field("", alias="jan_code")
    description: str = ""

    def price_for(self, color_type: str, size: str) -> Optional[ProductPrice]:
        for p in self.prices:
            if p.color == color_type and p.size == size:
                return p
        return None

    def sizes_for_color_type(self, color_type: str) -> Tuple[str, ...]:
        return tuple(p.size for p in self.prices if p.color == color_type)

    @property
    def display_name(self) -> str:
        parts = [self.code, self.name, self.variant_name]
        return " ".join(p for p in parts if p)


class BrandColor(CamelModel):
    code: str
    name: str
    hex: str = ""
    type: str = "カラー"


class SizeName(CamelModel):
    name: str


class PartnerCode(CamelModel):
    code: str
    partner_name: str = ""
    description: str = ""
    rate: Optional[float] = None


class CustomerInfo(CamelModel):
    id: Optional[str] = None
    company_name: str = ""
    name_kanji: str = ""
    name_kana: str = ""
    email: str = ""
    phone: str = ""
    zip_code: str = ""
    address1: str = ""
    address2: str = ""
    notes: str = ""
    has_separate_shipping_address: bool = False
    shipping_address1: str = ""
    shipping_address2: str = ""

    @property
    def shipping_address(self) -> str:
        if self.has_separate_shipping_address and self.shipping_address1:
            return self.shipping_address1
        return self.address1


class PrintLocation(CamelModel):
    location_id: str
    group_name: str = ""
    label: str = ""


class PrintSizeInfo(CamelModel):
    size_id: str
    label: str = ""


class SizeOrder(CamelModel):
    size_name: str
    sort_order: int


# brand -> color code -> color
ColorPalettes = Dict[str, Dict[str, BrandColor]]
