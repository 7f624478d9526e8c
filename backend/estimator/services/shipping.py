import logging

from estimator.models.domain import CustomerInfo
from estimator.models.pricing import DEFAULT_REGION, PricingData

logger = logging.getLogger(__name__)


def calculate_shipping_cost(subtotal: float, customer: CustomerInfo, pricing: PricingData) -> int:
    """Regional shipping fee; free at or above the threshold and for empty orders."""
    if subtotal <= 0 or subtotal >= pricing.shipping_free_threshold:
        return 0
    region = pricing.shipping_region_for(customer.shipping_address)
    info = pricing.shipping_costs.get(region) or pricing.shipping_costs.get(DEFAULT_REGION)
    if info is None:
        logger.warning("No shipping cost defined for region %s", region)
        return 0
    return info.cost
