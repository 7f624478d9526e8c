"""DTF (direct-to-film) cost tables, settings and results.

Table rows keep the column names of the admin database (snake_case);
settings, inputs and results use the camelCase wire format.
"""

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from estimator.models.domain import CamelModel

PRINT_LABOR_NAME = "DTF印刷"
PRESS_LABOR_NAME = "プレス工賃"


class DtfRow(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class DtfConsumable(DtfRow):
    name: str = ""
    type: Literal["ink_white", "ink_color", "film", "powder", "cleaning"]
    unit_price: float = 0
    unit: str = ""
    consumption_rate: float = 0
    consumption_unit: str = ""

    @property
    def cost_per_cm2(self) -> float:
        return (self.unit_price / 1000) * self.consumption_rate


class DtfEquipment(DtfRow):
    name: str = ""
    purchase_price: float
    depreciation_years: float
    power_consumption_w: float = 0

    def depreciation_per_hour(self, monthly_work_hours: float) -> float:
        if self.depreciation_years <= 0 or monthly_work_hours <= 0:
            return 0.0
        monthly = self.purchase_price / (self.depreciation_years * 12)
        return monthly / monthly_work_hours


class DtfLaborCost(DtfRow):
    name: str
    cost_per_hour: float = 0
    setup_fee: float = 0


class DtfPressTimeCost(DtfRow):
    minutes: float
    price_per_press: float


class DtfElectricityRate(DtfRow):
    provider: str = ""
    base_fee: float = 0
    tier1_kwh: float = 0
    tier1_rate: float = 0
    tier2_kwh: float = 0
    tier2_rate: float = 25.51
    tier3_rate: float = 0


class DtfPrinter(DtfRow):
    id: int
    name: str = ""
    film_width_mm: float
    printable_width_mm: Optional[float] = None
    is_default: bool = False

    @property
    def effective_width_mm(self) -> float:
        return self.printable_width_mm or self.film_width_mm


class DtfPrintSpeed(DtfRow):
    id: int
    printer_id: int
    resolution_dpi: str = ""
    pass_count: int = 0
    ink_density: Optional[float] = None
    speed_sqm_per_hour_min: float
    notes: Optional[str] = None
    is_default: bool = False


class DtfPrintSettings(CamelModel):
    film_width_mm: float = 280
    logo_margin_mm: float = 5
    print_speed_meters_per_hour: float = 6
    press_time_minutes_per_item: float = 3
    operating_hours_per_day: float = 8
    operating_days_per_month: float = 20

    @property
    def monthly_work_hours(self) -> float:
        return self.operating_days_per_month * self.operating_hours_per_day


class DtfData(DtfRow):
    consumables: Tuple[DtfConsumable, ...] = ()
    equipment: Tuple[DtfEquipment, ...] = ()
    labor_costs: Tuple[DtfLaborCost, ...] = ()
    press_time_costs: Tuple[DtfPressTimeCost, ...] = ()
    electricity_rates: Tuple[DtfElectricityRate, ...] = ()

    def consumable(self, consumable_type: str) -> Optional[DtfConsumable]:
        return next((c for c in self.consumables if c.type == consumable_type), None)

    def labor(self, name: str, default: DtfLaborCost) -> DtfLaborCost:
        return next((c for c in self.labor_costs if c.name == name), default)

    def electricity_rate(self) -> DtfElectricityRate:
        return self.electricity_rates[0] if self.electricity_rates else DtfElectricityRate()

    def press_tier_for(self, minutes: float) -> Optional[DtfPressTimeCost]:
        """Entry with the greatest ``minutes`` that does not exceed ``minutes``."""
        qualifying = [p for p in self.press_time_costs if p.minutes <= minutes]
        if not qualifying:
            return None
        return max(qualifying, key=lambda p: p.minutes)


class DtfCalculationInputs(CamelModel):
    logo_width_mm: float
    logo_height_mm: float
    logo_quantity: int
    profit_margin: float = 2.0
    round_up_to_10: bool = True


class DtfLayout(CamelModel):
    logos_per_row: int
    rows_needed: int
    total_film_length_meters: float


class DtfDetailsPerItem(CamelModel):
    film: float
    white_ink: float
    color_ink: float
    powder: float
    setup: float
    equipment_and_print_labor: float
    electricity: float
    press: float


class DtfCalculationResult(CamelModel):
    cost_per_item: float
    selling_price_per_item: float
    details_per_item: DtfDetailsPerItem
    total_film_length_meters: float
    print_time_hours: float
