import logging
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException

from estimator.api.deps import get_catalog
from estimator.errors import DesignValidationError, OrderValidationError
from estimator.models.catalog import CatalogData
from estimator.models.domain import CamelModel, OrderDetail, PrintDesign
from estimator.services import order_builder
from estimator.services.eligibility import check_brand_allowed
from estimator.services.garment import build_order_detail
from estimator.services.stock import StockResolver

logger = logging.getLogger(__name__)
router = APIRouter()


class AddItemRequest(CamelModel):
    items: Tuple[OrderDetail, ...] = ()
    new_item: OrderDetail
    is_privileged_mode: bool = False


class SelectItemRequest(CamelModel):
    product_id: str
    color: str = ""
    size: str = ""
    quantity: int = 1
    partner_code: Optional[str] = None
    is_partner_mode: bool = False


class SelectionResponse(CamelModel):
    color: str
    size: str


class SaveDesignRequest(CamelModel):
    designs: Tuple[PrintDesign, ...] = ()
    design: PrintDesign
    is_reorder: bool = False


@router.post("/items", response_model=List[OrderDetail])
async def add_item(req: AddItemRequest, catalog: CatalogData = Depends(get_catalog)):
    product = catalog.product_map.get(req.new_item.product_id)
    if product is None:
        raise HTTPException(status_code=422, detail="unknownProduct")
    try:
        check_brand_allowed(req.items, product, catalog.product_map, req.is_privileged_mode)
    except OrderValidationError as e:
        raise HTTPException(status_code=422, detail=e.code)
    return order_builder.add_item(
        req.items, req.new_item, catalog.product_map, catalog.colors, catalog.size_order_map
    )


def _product(catalog: CatalogData, product_id: str):
    product = catalog.product_map.get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="product not found")
    return product


@router.post("/items/build", response_model=OrderDetail)
async def build_item(req: SelectItemRequest, catalog: CatalogData = Depends(get_catalog)):
    """Price a picker selection as an order line (partner rates applied here)."""
    product = _product(catalog, req.product_id)
    stock = StockResolver(catalog.colors, catalog.sizes, catalog.stock)
    try:
        return build_order_detail(
            product,
            req.color,
            req.size,
            req.quantity,
            stock,
            partner=catalog.partner(req.partner_code),
            partner_mode=req.is_partner_mode,
        )
    except OrderValidationError as e:
        raise HTTPException(status_code=422, detail=e.code)


@router.post("/items/select", response_model=SelectionResponse)
async def select_item(req: SelectItemRequest, catalog: CatalogData = Depends(get_catalog)):
    """First orderable color/size when the current picker selection is out of stock."""
    product = _product(catalog, req.product_id)
    stock = StockResolver(catalog.colors, catalog.sizes, catalog.stock)
    color, size = stock.auto_select(product, req.color, req.size)
    return SelectionResponse(color=color, size=size)


@router.post("/designs", response_model=List[PrintDesign])
async def save_design(req: SaveDesignRequest):
    if req.is_reorder:
        raise HTTPException(status_code=409, detail="reorder designs are read-only")
    try:
        return order_builder.save_design(req.designs, req.design)
    except DesignValidationError as e:
        raise HTTPException(status_code=422, detail=e.code)
