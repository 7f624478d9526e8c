import logging
from typing import Iterable, Optional

from estimator.errors import OrderValidationError
from estimator.models.domain import OrderDetail, PartnerCode, Product, ProductPrice
from estimator.services.money import round_yen
from estimator.services.stock import StockResolver

logger = logging.getLogger(__name__)


def resolve_unit_price(
    price_info: ProductPrice,
    partner: Optional[PartnerCode] = None,
    partner_mode: bool = False,
) -> int:
    """Unit price fixed when the garment is added to the order.

    Partners with a positive rate pay ``round(listPrice * rate)``; everyone
    else pays the catalog price.
    """
    if partner_mode and partner is not None and isinstance(partner.rate, (int, float)) and partner.rate > 0:
        return round_yen(price_info.list_price * partner.rate)
    return int(price_info.price)


def build_order_detail(
    product: Product,
    color_name: str,
    size: str,
    quantity: int,
    stock: StockResolver,
    partner: Optional[PartnerCode] = None,
    partner_mode: bool = False,
) -> OrderDetail:
    """Turn a picker selection into an order line.

    Raises:
        OrderValidationError: invalidSelection (no size, no price or quantity <= 0)
            or outOfStock.
    """
    if not size or not quantity or quantity <= 0:
        raise OrderValidationError("invalidSelection")
    if not stock.is_in_stock(product, color_name, size):
        raise OrderValidationError("outOfStock")

    color = stock.find_color(product, color_name)
    price_info = product.price_for(color.type, size) if color else None
    if price_info is None:
        logger.warning("No price for product=%s color=%s size=%s", product.id, color_name, size)
        raise OrderValidationError("invalidSelection")

    return OrderDetail(
        product_id=product.id,
        product_name=product.display_name,
        color=color_name,
        size=size,
        quantity=quantity,
        unit_price=resolve_unit_price(price_info, partner, partner_mode),
    )


def calculate_tshirt_cost(items: Iterable[OrderDetail], bring_in_mode: bool = False) -> int:
    """Sum of unitPrice x quantity; nothing is charged for customer-supplied garments."""
    if bring_in_mode:
        return 0
    return sum(item.unit_price * item.quantity for item in items)
