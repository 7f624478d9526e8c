"""Order line and print design editing.

Every function returns a new tuple; inputs are never modified.
"""

import logging
import uuid
from typing import Dict, Iterable, Optional, Tuple

from estimator.errors import DesignValidationError
from estimator.models.domain import ColorPalettes, OrderDetail, PrintDesign, Product
from estimator.services.validation import DesignValidator

logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT_CODE = "zzzz"
UNKNOWN_SIZE_RANK = 99
UNKNOWN_COLOR_CODE = "9999"

NEW_DESIGN_PREFIX = "new_"
SAVED_DESIGN_PREFIX = "design_"


def _color_code(item: OrderDetail, product: Optional[Product], palettes: ColorPalettes) -> str:
    if product is None:
        return UNKNOWN_COLOR_CODE
    palette = palettes.get(product.brand)
    if not palette:
        return UNKNOWN_COLOR_CODE
    for color in palette.values():
        if color.name == item.color:
            return color.code
    return UNKNOWN_COLOR_CODE


def sort_order_details(
    items: Iterable[OrderDetail],
    products: Dict[str, Product],
    palettes: ColorPalettes,
    size_order: Dict[str, int],
) -> Tuple[OrderDetail, ...]:
    """Sort by product code, then size rank, then brand color code."""

    def key(item: OrderDetail):
        product = products.get(item.product_id)
        code = product.code if product else UNKNOWN_PRODUCT_CODE
        rank = size_order.get(item.size, UNKNOWN_SIZE_RANK)
        return (code, rank, _color_code(item, product, palettes))

    return tuple(sorted(items, key=key))


def add_item(
    items: Iterable[OrderDetail],
    new_item: OrderDetail,
    products: Dict[str, Product],
    palettes: ColorPalettes,
    size_order: Dict[str, int],
) -> Tuple[OrderDetail, ...]:
    """Add a line, summing quantities when (product, color, size) is already present."""
    merged = []
    found = False
    for item in items:
        if not found and item.same_line(new_item):
            item = item.model_copy(update={"quantity": item.quantity + new_item.quantity})
            found = True
        merged.append(item)
    if not found:
        merged.append(new_item)
    logger.debug("add_item product=%s merged=%s lines=%d", new_item.product_id, found, len(merged))
    return sort_order_details(merged, products, palettes, size_order)


def remove_item(items: Iterable[OrderDetail], index: int) -> Tuple[OrderDetail, ...]:
    return tuple(item for i, item in enumerate(items) if i != index)


def update_quantity(
    items: Iterable[OrderDetail],
    index: int,
    quantity: int,
    products: Dict[str, Product],
    palettes: ColorPalettes,
    size_order: Dict[str, int],
) -> Tuple[OrderDetail, ...]:
    quantity = max(1, quantity or 1)
    updated = [
        item.model_copy(update={"quantity": quantity}) if i == index else item
        for i, item in enumerate(items)
    ]
    return sort_order_details(updated, products, palettes, size_order)


def new_design(default_size: str = "30x40") -> PrintDesign:
    """Blank design for the editor; it gets a permanent id once saved."""
    return PrintDesign(id=f"{NEW_DESIGN_PREFIX}{uuid.uuid4().hex}", size=default_size)


def save_design(
    designs: Iterable[PrintDesign],
    design: PrintDesign,
    validator: Optional[DesignValidator] = None,
) -> Tuple[PrintDesign, ...]:
    """Insert or replace ``design``.

    Raises:
        DesignValidationError: when the design breaks a rule; ``designs`` is left as is.
    """
    designs = tuple(designs)
    error = (validator or DesignValidator()).validate(design, designs)
    if error:
        logger.info("Rejected design id=%s: %s", design.id, error)
        raise DesignValidationError(error)

    if design.id.startswith(NEW_DESIGN_PREFIX):
        saved = design.model_copy(update={"id": f"{SAVED_DESIGN_PREFIX}{uuid.uuid4().hex}"})
        return designs + (saved,)
    if not any(d.id == design.id for d in designs):
        return designs + (design,)
    return tuple(design if d.id == design.id else d for d in designs)


def remove_design(designs: Iterable[PrintDesign], design_id: str) -> Tuple[PrintDesign, ...]:
    return tuple(d for d in designs if d.id != design_id)
