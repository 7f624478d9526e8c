import pytest

from estimator.models.catalog import CatalogData
from estimator.models.domain import (
    BrandColor,
    OrderDetail,
    PartnerCode,
    PrintDesign,
    PrintLocation,
    PrintSizeInfo,
    Product,
    ProductPrice,
    SizeName,
    SizeOrder,
)
from estimator.models.dtf import (
    DtfConsumable,
    DtfData,
    DtfElectricityRate,
    DtfEquipment,
    DtfLaborCost,
    DtfPressTimeCost,
    DtfPrintSettings,
)
from estimator.models.pricing import (
    PlateCost,
    PricingData,
    PrintPricingTier,
    PrintSizeConstraint,
    ShippingRegion,
    SpecialInkOption,
)

WHITE = "ホワイト"
COLOR = "カラー"


def _prices(color_type, sizes, price, list_price):
    return tuple(ProductPrice(color=color_type, size=s, price=price, list_price=list_price) for s in sizes)


@pytest.fixture
def products():
    return (
        Product(
            id="p1", code="A100", name="Tee", brand="United Athle", category_id="tshirts",
            tags=("cotton",), colors=("001", "002"),
            prices=_prices(WHITE, ("M", "L"), 600, 1100) + _prices(COLOR, ("M", "L"), 700, 1250),
        ),
        Product(
            id="p2", code="B200", name="Tote", brand="Generic", category_id="bags",
            tags=("small-print",), colors=("N01",), prices=_prices(COLOR, ("F",), 400, 800),
        ),
        Product(
            id="p3", code="A050", name="Hoodie", brand="Generic", category_id="hoodies",
            tags=("heavy", "small-print"), colors=("N01",), prices=_prices(COLOR, ("M",), 2000, 3500),
        ),
        Product(
            id="p4", code="C300", name="Cap", brand="Generic", category_id="caps",
            colors=("N01",), prices=_prices(COLOR, ("F",), 500, 900),
        ),
    )


@pytest.fixture
def palettes():
    return {
        "United Athle": {
            "001": BrandColor(code="001", name="ホワイト", type=WHITE),
            "002": BrandColor(code="002", name="ブラック", type=COLOR),
        },
        "Generic": {
            "N01": BrandColor(code="N01", name="ナチュラル", type=COLOR),
        },
    }


@pytest.fixture
def pricing():
    return PricingData(
        print_size_constraints=(
            PrintSizeConstraint(type="location", id="back-neck", sizes=("10x10",)),
            PrintSizeConstraint(type="tag", id="small-print", sizes=("10x10", "30x40")),
            PrintSizeConstraint(type="tag", id="heavy", sizes=("30x40", "35x50")),
        ),
        category_print_locations={"bags": ("front-center",), "caps": ()},
        special_ink_options=(
            SpecialInkOption(type="silver", display_name="Silver", cost=20),
            SpecialInkOption(type="luminous", display_name="Glow", cost=3000, charge="setup"),
        ),
        plate_costs={
            "10x10-normal": PlateCost(cost=3000),
            "30x40-normal": PlateCost(cost=4000),
            "30x40-decomposition": PlateCost(cost=6000, surcharge_per_color=10),
        },
        print_pricing_tiers=(
            PrintPricingTier(min=1, max=29, first_color=300, additional_color=150),
            PrintPricingTier(min=30, max=99, first_color=200, additional_color=100),
            PrintPricingTier(min=100, max=100000, first_color=120, additional_color=60),
        ),
        additional_print_costs_by_size={"35x50": 50},
        additional_print_costs_by_location={"sleeve-left": 30},
        additional_print_costs_by_tag={"small-print": 20},
        plate_cost_category_combinations={"bags": "tshirts"},
        shipping_costs={
            "DEFAULT": ShippingRegion(cost=1200),
            "HOKKAIDO": ShippingRegion(cost=2000, prefectures=("北海道",)),
        },
        shipping_free_threshold=30000,
        tax_rate=0.10,
    )


@pytest.fixture
def dtf_data():
    return DtfData(
        consumables=(
            DtfConsumable(type="film", unit_price=30000),
            DtfConsumable(type="ink_white", unit_price=20000, consumption_rate=0.02),
            DtfConsumable(type="ink_color", unit_price=15000, consumption_rate=0.01),
            DtfConsumable(type="powder", unit_price=4000, consumption_rate=0.05),
        ),
        equipment=(DtfEquipment(name="printer", purchase_price=1_200_000, depreciation_years=5, power_consumption_w=1000),),
        labor_costs=(
            DtfLaborCost(name="DTF印刷", cost_per_hour=1500, setup_fee=0),
            DtfLaborCost(name="プレス工賃", cost_per_hour=4000, setup_fee=6000),
        ),
        press_time_costs=(
            DtfPressTimeCost(minutes=2, price_per_press=150),
            DtfPressTimeCost(minutes=1, price_per_press=80),
            DtfPressTimeCost(minutes=3, price_per_press=200),
        ),
        electricity_rates=(DtfElectricityRate(tier2_rate=30),),
    )


@pytest.fixture
def dtf_settings():
    return DtfPrintSettings(
        film_width_mm=300,
        logo_margin_mm=0,
        print_speed_meters_per_hour=2,
        press_time_minutes_per_item=3,
        operating_hours_per_day=8,
        operating_days_per_month=20,
    )


@pytest.fixture
def catalog(products, palettes, pricing, dtf_data, dtf_settings):
    return CatalogData(
        products=products,
        colors=palettes,
        sizes={"United Athle": {"M": SizeName(name="M"), "L": SizeName(name="L")}},
        stock={"A100-001-M": 10, "A100-001-L": 0, "A100-002-M": 0, "A100-002-L": 0},
        pricing=pricing,
        print_locations=(
            PrintLocation(location_id="front-center", group_name="Front", label="Front"),
            PrintLocation(location_id="back-center", group_name="Back", label="Back"),
            PrintLocation(location_id="back-neck", group_name="Back", label="Neck"),
            PrintLocation(location_id="sleeve-left", group_name="Sleeve", label="Left sleeve"),
        ),
        print_sizes=(
            PrintSizeInfo(size_id="10x10"),
            PrintSizeInfo(size_id="30x40"),
            PrintSizeInfo(size_id="35x50"),
        ),
        size_order=(
            SizeOrder(size_name="M", sort_order=2),
            SizeOrder(size_name="L", sort_order=3),
            SizeOrder(size_name="F", sort_order=10),
        ),
        partner_codes=(
            PartnerCode(code="PARTNER-A", rate=0.6),
            PartnerCode(code="PARTNER-B"),
        ),
        dtf=dtf_data,
        dtf_print_settings=dtf_settings,
    )


@pytest.fixture
def product_map(products):
    return {p.id: p for p in products}


@pytest.fixture
def size_order():
    return {"M": 2, "L": 3, "F": 10}


def line(product_id, color, size, quantity, unit_price=0):
    return OrderDetail(product_id=product_id, color=color, size=size, quantity=quantity, unit_price=unit_price)


def design(design_id, location="front-center", size="30x40", colors=1, **kw):
    return PrintDesign(id=design_id, location=location, size=size, colors=colors, **kw)
