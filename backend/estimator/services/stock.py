"""Color / size availability against the stock table."""

import logging
from typing import Dict, List, NamedTuple, Optional, Tuple

from estimator.models.domain import BrandColor, ColorPalettes, Product, SizeName

logger = logging.getLogger(__name__)

# Only these brands publish stock levels; everything else is always orderable.
STOCK_TRACKED_BRANDS = frozenset({"United Athle", "Print Star"})

DEFAULT_COLOR_TYPE = "カラー"


class ColorOption(NamedTuple):
    color: BrandColor
    in_stock: bool


class SizeOption(NamedTuple):
    size: str
    in_stock: bool


def stock_key(product_code: str, color_code: str, size_code: str) -> str:
    return f"{product_code}-{color_code}-{size_code}"


class StockResolver:
    def __init__(
        self,
        palettes: ColorPalettes,
        sizes: Dict[str, Dict[str, SizeName]],
        stock: Dict[str, int],
    ):
        self.palettes = palettes
        self.sizes = sizes
        self.stock = stock

    def is_stock_tracked(self, brand: str) -> bool:
        return brand in STOCK_TRACKED_BRANDS

    def _size_code(self, product: Product, size_name: str) -> Optional[str]:
        for code, data in self.sizes.get(product.brand, {}).items():
            if data.name == size_name:
                return code
        return None

    def _has_stock(self, product: Product, color_code: str, size_name: str) -> bool:
        size_code = self._size_code(product, size_name)
        if not size_code:
            return False
        return self.stock.get(stock_key(product.code, color_code, size_code), 0) > 0

    def find_color(self, product: Product, color_name: str) -> Optional[BrandColor]:
        for color in self.palettes.get(product.brand, {}).values():
            if color.name == color_name:
                return color
        return None

    def color_options(self, product: Product) -> List[ColorOption]:
        """Product colors from the brand palette, in product order."""
        palette = list(self.palettes.get(product.brand, {}).values())
        options = []
        for code in product.colors:
            color = next((c for c in palette if c.code == code), None)
            if color is None:
                continue
            in_stock = True
            if self.is_stock_tracked(product.brand):
                in_stock = any(
                    self._has_stock(product, color.code, size)
                    for size in product.sizes_for_color_type(color.type)
                )
            options.append(ColorOption(color, in_stock))
        return options

    def size_options(self, product: Product, color_name: str) -> List[SizeOption]:
        color = self.find_color(product, color_name)
        color_type = color.type if color else DEFAULT_COLOR_TYPE
        options = []
        for size in product.sizes_for_color_type(color_type):
            in_stock = True
            if self.is_stock_tracked(product.brand) and color is not None:
                in_stock = self._has_stock(product, color.code, size)
            options.append(SizeOption(size, in_stock))
        return options

    def is_in_stock(self, product: Product, color_name: str, size: str) -> bool:
        return any(o.size == size and o.in_stock for o in self.size_options(product, color_name))

    def auto_select(self, product: Product, color_name: str = "", size: str = "") -> Tuple[str, str]:
        """Keep the current (color, size) if still orderable, else advance to the first in-stock option."""
        colors = self.color_options(product)
        if not any(o.color.name == color_name and o.in_stock for o in colors):
            color_name = next((o.color.name for o in colors if o.in_stock), "")

        sizes = self.size_options(product, color_name)
        if not any(o.size == size and o.in_stock for o in sizes):
            size = next((o.size for o in sizes if o.in_stock), "")
        logger.debug("auto_select product=%s -> color=%s size=%s", product.id, color_name, size)
        return color_name, size
