import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from estimator.api.deps import get_catalog
from estimator.models.catalog import CatalogData
from estimator.models.domain import CamelModel
from estimator.models.dtf import DtfCalculationInputs, DtfCalculationResult, DtfLayout, DtfPrintSettings
from estimator.services.dtf import calculate_dtf_cost, calculate_layout, derive_print_settings, select_printer_and_speed

logger = logging.getLogger(__name__)
router = APIRouter()


class DtfCalculateRequest(DtfCalculationInputs):
    printer_id: Optional[int] = None
    speed_id: Optional[int] = None


class DtfLayoutRequest(CamelModel):
    logo_width_mm: float
    logo_height_mm: float
    logo_quantity: int
    print_settings: Optional[DtfPrintSettings] = None


def _print_settings(catalog: CatalogData, printer_id: Optional[int], speed_id: Optional[int]) -> DtfPrintSettings:
    """Catalog DTF settings adjusted for the chosen (or default) printer and speed."""
    printer, speed = select_printer_and_speed(catalog.dtf_printers, catalog.dtf_print_speeds)
    if printer_id is not None:
        printer = next((p for p in catalog.dtf_printers if p.id == printer_id), None)
        if printer is None:
            raise HTTPException(status_code=404, detail="printer not found")
        speed = next((s for s in catalog.dtf_print_speeds if s.printer_id == printer.id), None)
    if speed_id is not None:
        speed = next((s for s in catalog.dtf_print_speeds if s.id == speed_id), None)
        if speed is None:
            raise HTTPException(status_code=404, detail="print speed not found")
    if printer is None or speed is None:
        return catalog.dtf_print_settings
    return derive_print_settings(catalog.dtf_print_settings, printer, speed)


@router.post("/calculate", response_model=DtfCalculationResult)
async def calculate(req: DtfCalculateRequest, catalog: CatalogData = Depends(get_catalog)):
    settings = _print_settings(catalog, req.printer_id, req.speed_id)
    result = calculate_dtf_cost(req, catalog.dtf, settings)
    if result is None:
        logger.info("DTF cost not computable for %sx%s x%s", req.logo_width_mm, req.logo_height_mm, req.logo_quantity)
        raise HTTPException(status_code=422, detail="DTF cost not computable for these inputs")
    return result


@router.post("/layout", response_model=DtfLayout)
async def layout(req: DtfLayoutRequest, catalog: CatalogData = Depends(get_catalog)):
    settings = req.print_settings or catalog.dtf_print_settings
    return calculate_layout(req.logo_width_mm, req.logo_height_mm, req.logo_quantity, settings)
