from typing import List, Tuple

from fastapi import APIRouter, Depends

from estimator.api.deps import get_catalog
from estimator.models.catalog import CatalogData
from estimator.models.domain import CamelModel, OrderDetail, PrintLocation
from estimator.services.eligibility import available_locations_for, available_sizes_for, products_in_order

router = APIRouter()


class EligibilityRequest(CamelModel):
    items: Tuple[OrderDetail, ...] = ()
    location: str = ""
    is_privileged_mode: bool = False


@router.post("/sizes", response_model=List[str])
async def sizes(req: EligibilityRequest, catalog: CatalogData = Depends(get_catalog)):
    products = products_in_order(req.items, catalog.product_map)
    return available_sizes_for(
        req.location, products, catalog.pricing, catalog.all_print_sizes, req.is_privileged_mode
    )


@router.post("/locations", response_model=List[PrintLocation])
async def locations(req: EligibilityRequest, catalog: CatalogData = Depends(get_catalog)):
    return available_locations_for(
        req.items, catalog.product_map, catalog.pricing, catalog.print_locations, req.is_privileged_mode
    )
