"""Which print sizes and locations an order may use."""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from estimator.errors import OrderValidationError
from estimator.models.domain import OrderDetail, PrintDesign, PrintLocation, Product
from estimator.models.pricing import PricingData

logger = logging.getLogger(__name__)


def products_in_order(items: Iterable[OrderDetail], products: Dict[str, Product]) -> Tuple[Product, ...]:
    """Distinct products of the order, in order of first appearance."""
    seen = []
    for item in items:
        product = products.get(item.product_id)
        if product is not None and product not in seen:
            seen.append(product)
    return tuple(seen)


def _intersect(size_sets: Sequence[Sequence[str]]) -> Tuple[str, ...]:
    result = list(size_sets[0])
    for sizes in size_sets[1:]:
        result = [s for s in result if s in sizes]
    return tuple(result)


def available_sizes_for(
    location: str,
    products: Iterable[Product],
    pricing: PricingData,
    all_sizes: Sequence[str],
    privileged: bool = False,
) -> Tuple[str, ...]:
    """Print sizes allowed for a design at ``location`` given the products ordered.

    The location constraint and, per product, the intersection of all of its
    tag constraints are intersected together. Without any applicable
    constraint every size is allowed. An empty result is valid.
    """
    if privileged:
        return tuple(all_sizes)

    allowed: List[Sequence[str]] = []
    location_constraint = pricing.location_size_constraint(location)
    if location_constraint is not None:
        allowed.append(location_constraint.sizes)

    for product in products:
        tag_constraints = pricing.tag_size_constraints(product.tags)
        if tag_constraints:
            allowed.append(_intersect([c.sizes for c in tag_constraints]))

    if not allowed:
        return tuple(all_sizes)
    return _intersect(allowed)


def coerce_design_size(design: PrintDesign, available: Sequence[str], all_sizes: Sequence[str]) -> PrintDesign:
    """Move the design to the first allowed size when its size is no longer allowed."""
    if not design.size or design.size in available:
        return design
    fallback = available[0] if available else (all_sizes[0] if all_sizes else "")
    logger.debug("Design %s size %s not available, switching to %s", design.id, design.size, fallback)
    return design.model_copy(update={"size": fallback})


def available_locations_for(
    items: Iterable[OrderDetail],
    products: Dict[str, Product],
    pricing: PricingData,
    print_locations: Sequence[PrintLocation],
    privileged: bool = False,
) -> Tuple[PrintLocation, ...]:
    """Print locations allowed for the categories present in the order.

    Categories without an allow-list impose no restriction. When nothing is
    allowed but some category does define a (possibly empty) list, printing
    is blocked and the result is empty.
    """
    if privileged:
        return tuple(print_locations)

    category_ids: List[str] = []
    for item in items:
        product = products.get(item.product_id)
        if product is not None and product.category_id and product.category_id not in category_ids:
            category_ids.append(product.category_id)
    if not category_ids:
        return tuple(print_locations)

    allowed_ids = set()
    has_rule = False
    for category_id in category_ids:
        rule = pricing.category_print_locations.get(category_id)
        if rule is not None:
            has_rule = True
            allowed_ids.update(rule)

    if not allowed_ids:
        return () if has_rule else tuple(print_locations)
    return tuple(loc for loc in print_locations if loc.location_id in allowed_ids)


def allowed_brand(
    items: Iterable[OrderDetail],
    products: Dict[str, Product],
    privileged: bool = False,
) -> Optional[str]:
    """Brand a customer order is locked to (the brand of its first product)."""
    if privileged:
        return None
    for item in items:
        product = products.get(item.product_id)
        if product is not None and product.brand:
            return product.brand
    return None


def check_brand_allowed(
    items: Iterable[OrderDetail],
    product: Product,
    products: Dict[str, Product],
    privileged: bool = False,
) -> None:
    """Raises:
        OrderValidationError: brandLocked when ``product`` is of another brand than the order.
    """
    brand = allowed_brand(items, products, privileged)
    if brand is not None and product.brand != brand:
        logger.info("Rejected %s (%s): order is locked to %s", product.id, product.brand, brand)
        raise OrderValidationError("brandLocked")
