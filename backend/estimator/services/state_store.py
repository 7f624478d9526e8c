"""Estimator editing session with pluggable persistence.

The store owns the only mutable reference (the current ``EstimatorState``).
Persistence is injected as two callables so the pricing core never touches
storage directly.
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence, Tuple

from estimator.errors import OrderValidationError, ReorderLockedError
from estimator.models.catalog import CatalogData
from estimator.models.cost import CostDetails, EstimateOptions
from estimator.models.domain import CustomerInfo, OrderDetail, PrintDesign, PrintLocation
from estimator.models.estimate import EstimatorState
from estimator.services import order_builder
from estimator.services.cost import CostCalculator
from estimator.services.eligibility import (
    available_locations_for,
    available_sizes_for,
    check_brand_allowed,
    coerce_design_size,
    products_in_order,
)
from estimator.services.garment import build_order_detail
from estimator.services.stock import StockResolver

logger = logging.getLogger(__name__)

LoadFn = Callable[[str], Optional[EstimatorState]]
SaveFn = Callable[[EstimatorState], None]


def generate_estimate_id(now: Optional[datetime] = None, provisional: bool = False) -> str:
    now = now or datetime.now()
    if provisional:
        return now.strftime("TBD%Y%m%d-%H%M%S")
    return now.strftime("E%Y%m%d-%H%M%S") + f"{now.microsecond // 1000:03d}"


class EstimatorStore:
    def __init__(
        self,
        catalog: CatalogData,
        load: Optional[LoadFn] = None,
        save: Optional[SaveFn] = None,
        state: Optional[EstimatorState] = None,
    ):
        self.catalog = catalog
        self._load = load
        self._save = save
        self._calculator = CostCalculator(catalog)
        self._stock = StockResolver(catalog.colors, catalog.sizes, catalog.stock)
        self._state = state or EstimatorState(estimate_id=generate_estimate_id())

    @property
    def state(self) -> EstimatorState:
        return self._state

    def open(self, estimate_id: str) -> EstimatorState:
        """Restore a saved session, or start an empty one under ``estimate_id``."""
        restored = self._load(estimate_id) if self._load else None
        if restored is None:
            logger.info("No snapshot for %s, starting a new estimate", estimate_id)
            restored = EstimatorState(estimate_id=estimate_id)
        self._state = restored
        return restored

    def _commit(self, **changes) -> EstimatorState:
        new_state = self._state.model_copy(update=changes)
        if self._save is not None:
            self._save(new_state)
        self._state = new_state
        return new_state

    # -- order lines ---------------------------------------------------

    def _sort_args(self):
        return self.catalog.product_map, self.catalog.colors, self.catalog.size_order_map

    def add_item(self, product_id: str, color: str, size: str, quantity: int) -> EstimatorState:
        product = self.catalog.product_map.get(product_id)
        if product is None:
            logger.info("Unknown product %s", product_id)
            raise OrderValidationError("unknownProduct")
        options = self._state.options
        item = build_order_detail(
            product,
            color,
            size,
            quantity,
            self._stock,
            partner=self.catalog.partner(self._state.partner_code),
            partner_mode=options.is_partner_mode,
        )
        return self.add_order_detail(item)

    def add_order_detail(self, item: OrderDetail) -> EstimatorState:
        """Raises:
            OrderValidationError: unknownProduct, or brandLocked for a customer order
                that already holds another brand.
        """
        product = self.catalog.product_map.get(item.product_id)
        if product is None:
            raise OrderValidationError("unknownProduct")
        check_brand_allowed(self._state.items, product, self.catalog.product_map, self._state.options.is_privileged)
        return self._commit_items(order_builder.add_item(self._state.items, item, *self._sort_args()))

    def remove_item(self, index: int) -> EstimatorState:
        return self._commit_items(order_builder.remove_item(self._state.items, index))

    def update_quantity(self, index: int, quantity: int) -> EstimatorState:
        return self._commit_items(order_builder.update_quantity(self._state.items, index, quantity, *self._sort_args()))

    def _commit_items(self, items: Tuple[OrderDetail, ...]) -> EstimatorState:
        designs = tuple(self._coerce(d, items) for d in self._state.designs)
        return self._commit(items=items, designs=designs)

    # -- print designs -------------------------------------------------

    def _check_editable(self) -> None:
        if self._state.options.is_reorder:
            raise ReorderLockedError(self._state.estimate_id)

    def _coerce(self, design: PrintDesign, items: Sequence[OrderDetail]) -> PrintDesign:
        # reorders keep their sizes; DTF designs are sized in cm
        if self._state.options.is_reorder or design.is_dtf or not design.location:
            return design
        return coerce_design_size(design, self._sizes_for(design.location, items), self.catalog.all_print_sizes)

    def save_design(self, design: PrintDesign) -> EstimatorState:
        self._check_editable()
        design = self._coerce(design, self._state.items)
        return self._commit(designs=order_builder.save_design(self._state.designs, design))

    def remove_design(self, design_id: str) -> EstimatorState:
        self._check_editable()
        return self._commit(designs=order_builder.remove_design(self._state.designs, design_id))

    # -- customer / flags ----------------------------------------------

    def set_customer(self, customer: CustomerInfo) -> EstimatorState:
        return self._commit(customer=customer)

    def set_options(self, options: EstimateOptions) -> EstimatorState:
        return self._commit(options=options)

    def set_partner_code(self, code: Optional[str]) -> EstimatorState:
        return self._commit(partner_code=code)

    # -- derived -------------------------------------------------------

    def _sizes_for(self, location: str, items: Sequence[OrderDetail]) -> Tuple[str, ...]:
        return available_sizes_for(
            location,
            products_in_order(items, self.catalog.product_map),
            self.catalog.pricing,
            self.catalog.all_print_sizes,
            self._state.options.is_privileged,
        )

    def available_sizes(self, location: str) -> Tuple[str, ...]:
        return self._sizes_for(location, self._state.items)

    def available_locations(self) -> Tuple[PrintLocation, ...]:
        return available_locations_for(
            self._state.items,
            self.catalog.product_map,
            self.catalog.pricing,
            self.catalog.print_locations,
            self._state.options.is_privileged,
        )

    def cost(self) -> CostDetails:
        state = self._state
        return self._calculator.calculate(state.items, state.designs, state.customer, state.options)
