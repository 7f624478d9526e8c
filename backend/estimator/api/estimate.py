import logging
from typing import Optional, Tuple

from fastapi import APIRouter, Depends
from pydantic import Field

from estimator.api.deps import get_catalog
from estimator.models.catalog import CatalogData
from estimator.models.cost import CostDetails, EstimateOptions
from estimator.models.domain import CamelModel, CustomerInfo, OrderDetail, PrintDesign
from estimator.services.cost import CostCalculator

logger = logging.getLogger(__name__)
router = APIRouter()


class EstimateRequest(CamelModel):
    items: Tuple[OrderDetail, ...] = ()
    designs: Tuple[PrintDesign, ...] = ()
    customer: Optional[CustomerInfo] = None
    options: EstimateOptions = Field(default_factory=EstimateOptions)


@router.post("/", response_model=CostDetails)
async def estimate(req: EstimateRequest, catalog: CatalogData = Depends(get_catalog)) -> CostDetails:
    cost = CostCalculator(catalog).calculate(req.items, req.designs, req.customer, req.options)
    logger.info("Estimate lines=%d designs=%d total=%s", len(req.items), len(req.designs), cost.total_cost_with_tax)
    return cost
