"""DTF (direct-to-film) transfer cost engine.

Film usage is estimated with simple shelf packing: identical logos laid out
in rows across the film width, no rotation.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from estimator.models.domain import PrintDesign
from estimator.models.dtf import (
    PRESS_LABOR_NAME,
    PRINT_LABOR_NAME,
    DtfCalculationInputs,
    DtfCalculationResult,
    DtfData,
    DtfDetailsPerItem,
    DtfLaborCost,
    DtfLayout,
    DtfPrinter,
    DtfPrintSettings,
    DtfPrintSpeed,
)
from estimator.models.pricing import PricingData
from estimator.services.money import ceil_to_10

logger = logging.getLogger(__name__)

SETUP_TIME_HOURS = 0.5
FILM_ROLL_METERS = 100

DEFAULT_PRINT_LABOR = DtfLaborCost(name=PRINT_LABOR_NAME, cost_per_hour=1500, setup_fee=0)
DEFAULT_PRESS_LABOR = DtfLaborCost(name=PRESS_LABOR_NAME, cost_per_hour=4000, setup_fee=6000)


@dataclass
class ConsumableCost:
    film: float
    white_ink: float
    color_ink: float
    powder: float

    @property
    def total(self) -> float:
        return self.film + self.white_ink + self.color_ink + self.powder


@dataclass
class OperationalCost:
    equipment_and_print_labor: float
    electricity: float
    print_time_hours: float


@dataclass
class PressCost:
    total: float
    setup_fee: float
    per_item: float


def calculate_layout(
    logo_width_mm: float,
    logo_height_mm: float,
    logo_quantity: int,
    print_settings: DtfPrintSettings,
) -> DtfLayout:
    margin = print_settings.logo_margin_mm
    pitch_mm = logo_width_mm + margin
    logos_per_row = math.floor((print_settings.film_width_mm + margin) / pitch_mm) if pitch_mm > 0 else 0
    if logos_per_row <= 0:
        return DtfLayout(logos_per_row=0, rows_needed=0, total_film_length_meters=0)
    rows_needed = math.ceil(logo_quantity / logos_per_row)
    total_film_length_mm = rows_needed * (logo_height_mm + margin)
    return DtfLayout(
        logos_per_row=logos_per_row,
        rows_needed=rows_needed,
        total_film_length_meters=total_film_length_mm / 1000,
    )


def calculate_consumable_cost(
    logo_area_cm2: float,
    total_film_length_meters: float,
    logo_quantity: int,
    dtf_data: DtfData,
) -> ConsumableCost:
    def rate(consumable_type: str) -> float:
        consumable = dtf_data.consumable(consumable_type)
        return consumable.cost_per_cm2 if consumable else 0.0

    film = dtf_data.consumable("film")
    # film is priced per roll
    film_cost_per_meter = (film.unit_price if film else 0.0) / FILM_ROLL_METERS
    total_area_cm2 = logo_area_cm2 * logo_quantity
    return ConsumableCost(
        film=total_film_length_meters * film_cost_per_meter,
        white_ink=total_area_cm2 * rate("ink_white"),
        color_ink=total_area_cm2 * rate("ink_color"),
        powder=total_area_cm2 * rate("powder"),
    )


def calculate_operational_cost(
    total_film_length_meters: float,
    dtf_data: DtfData,
    print_settings: DtfPrintSettings,
) -> OperationalCost:
    print_labor = dtf_data.labor(PRINT_LABOR_NAME, DEFAULT_PRINT_LABOR)
    electricity_rate = dtf_data.electricity_rate()

    print_time_hours = total_film_length_meters / print_settings.print_speed_meters_per_hour
    work_hours = print_time_hours + SETUP_TIME_HOURS

    monthly_work_hours = print_settings.monthly_work_hours
    depreciation_per_hour = sum(eq.depreciation_per_hour(monthly_work_hours) for eq in dtf_data.equipment)
    depreciation = depreciation_per_hour * work_hours
    labor = print_labor.cost_per_hour * work_hours

    total_watts = sum(eq.power_consumption_w for eq in dtf_data.equipment)
    kwh = total_watts * work_hours / 1000
    electricity = kwh * electricity_rate.tier2_rate

    return OperationalCost(
        equipment_and_print_labor=depreciation + labor,
        electricity=electricity,
        print_time_hours=print_time_hours,
    )


def calculate_press_cost(logo_quantity: int, press_time_minutes: float, dtf_data: DtfData) -> PressCost:
    press_labor = dtf_data.labor(PRESS_LABOR_NAME, DEFAULT_PRESS_LABOR)
    tier = dtf_data.press_tier_for(press_time_minutes)
    if tier is not None:
        per_item = tier.price_per_press
    else:
        logger.warning(
            "No press time cost entry found for %s minutes. Falling back to linear calculation.",
            press_time_minutes,
        )
        per_item = (press_labor.cost_per_hour / 60) * press_time_minutes
    return PressCost(total=per_item * logo_quantity, setup_fee=press_labor.setup_fee, per_item=per_item)


def selling_price_for(cost_per_item: float, profit_margin: float, round_up_to_10: bool) -> float:
    price = cost_per_item * profit_margin
    if round_up_to_10:
        return float(ceil_to_10(price))
    return price


def _can_run(dtf_data: DtfData, print_settings: DtfPrintSettings) -> bool:
    """Print speed, monthly hours and depreciation periods must be positive."""
    if print_settings.print_speed_meters_per_hour <= 0 or print_settings.monthly_work_hours <= 0:
        logger.warning(
            "DTF print settings unusable (speed=%s m/h, monthly hours=%s)",
            print_settings.print_speed_meters_per_hour,
            print_settings.monthly_work_hours,
        )
        return False
    broken = [eq.name for eq in dtf_data.equipment if eq.depreciation_years <= 0]
    if broken:
        logger.warning("DTF equipment without a depreciation period: %s", broken)
        return False
    return True


def calculate_dtf_cost(
    inputs: DtfCalculationInputs,
    dtf_data: DtfData,
    print_settings: DtfPrintSettings,
) -> Optional[DtfCalculationResult]:
    """Cost and selling price per transfer, or None when not computable."""
    quantity = inputs.logo_quantity
    if inputs.logo_width_mm <= 0 or inputs.logo_height_mm <= 0 or quantity <= 0:
        return None
    if not _can_run(dtf_data, print_settings):
        return None

    layout = calculate_layout(inputs.logo_width_mm, inputs.logo_height_mm, quantity, print_settings)
    if layout.logos_per_row <= 0:
        return None

    logo_area_cm2 = (inputs.logo_width_mm * inputs.logo_height_mm) / 100
    consumables = calculate_consumable_cost(logo_area_cm2, layout.total_film_length_meters, quantity, dtf_data)
    operational = calculate_operational_cost(layout.total_film_length_meters, dtf_data, print_settings)
    press = calculate_press_cost(quantity, print_settings.press_time_minutes_per_item, dtf_data)

    total_cost = (
        consumables.total
        + operational.equipment_and_print_labor
        + operational.electricity
        + press.setup_fee
        + press.total
    )
    cost_per_item = total_cost / quantity
    selling_price = selling_price_for(cost_per_item, inputs.profit_margin, inputs.round_up_to_10)

    logger.debug("DTF %sx%smm x%d cost/item=%.2f price=%s", inputs.logo_width_mm, inputs.logo_height_mm, quantity, cost_per_item, selling_price)
    return DtfCalculationResult(
        cost_per_item=cost_per_item,
        selling_price_per_item=selling_price,
        details_per_item=DtfDetailsPerItem(
            film=consumables.film / quantity,
            white_ink=consumables.white_ink / quantity,
            color_ink=consumables.color_ink / quantity,
            powder=consumables.powder / quantity,
            setup=press.setup_fee / quantity,
            equipment_and_print_labor=operational.equipment_and_print_labor / quantity,
            electricity=operational.electricity / quantity,
            press=press.per_item,
        ),
        total_film_length_meters=layout.total_film_length_meters,
        print_time_hours=operational.print_time_hours,
    )


def calculate_dtf_print_cost(
    designs: Sequence[PrintDesign],
    print_quantity: int,
    dtf_data: DtfData,
    print_settings: DtfPrintSettings,
    pricing: PricingData,
) -> Tuple[float, Dict[str, float]]:
    """Selling price of the DTF designs of an estimate, total and per design id."""
    per_design: Dict[str, float] = {}
    if print_quantity <= 0:
        return 0.0, per_design

    for design in designs:
        if not design.is_dtf or not (design.width_cm and design.height_cm):
            continue
        if design.width_cm <= 0 or design.height_cm <= 0:
            continue
        result = calculate_dtf_cost(
            DtfCalculationInputs(
                logo_width_mm=design.width_cm * 10,
                logo_height_mm=design.height_cm * 10,
                logo_quantity=print_quantity,
                profit_margin=pricing.dtf_profit_margin,
                round_up_to_10=pricing.dtf_round_up_to_10,
            ),
            dtf_data,
            print_settings,
        )
        if result is not None:
            per_design[design.id] = result.selling_price_per_item * print_quantity
    return sum(per_design.values()), per_design


def select_printer_and_speed(
    printers: Sequence[DtfPrinter],
    speeds: Sequence[DtfPrintSpeed],
) -> Tuple[Optional[DtfPrinter], Optional[DtfPrintSpeed]]:
    """Default printer (else the first) and its default speed (else its first)."""
    printer = next((p for p in printers if p.is_default), printers[0] if printers else None)
    if printer is None:
        return None, None
    own = [s for s in speeds if s.printer_id == printer.id]
    speed = next((s for s in own if s.is_default), own[0] if own else None)
    return printer, speed


def derive_print_settings(
    base: DtfPrintSettings,
    printer: DtfPrinter,
    speed: DtfPrintSpeed,
) -> DtfPrintSettings:
    """Film width and linear print speed for a printer / speed profile."""
    width_mm = printer.effective_width_mm
    if width_mm <= 0:
        logger.warning("Printer %s has no usable film width, keeping base print settings", printer.id)
        return base
    linear_speed = speed.speed_sqm_per_hour_min / (width_mm / 1000)
    if speed.ink_density and speed.ink_density > 1:
        linear_speed /= speed.ink_density
    return base.model_copy(update={"film_width_mm": width_mm, "print_speed_meters_per_hour": linear_speed})
