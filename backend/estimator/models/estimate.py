from datetime import datetime
from typing import Optional, Tuple

from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

from estimator.models.cost import EstimateOptions
from estimator.models.domain import CamelModel, CustomerInfo, OrderDetail, PrintDesign


class EstimateSnapshot(SQLModel, table=True):
    estimate_id: str = Field(primary_key=True, max_length=64)
    payload: str
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class EstimatorState(CamelModel):
    """One editing session of the estimator."""

    estimate_id: str
    items: Tuple[OrderDetail, ...] = ()
    designs: Tuple[PrintDesign, ...] = ()
    customer: CustomerInfo = PydanticField(default_factory=CustomerInfo)
    options: EstimateOptions = PydanticField(default_factory=EstimateOptions)
    partner_code: Optional[str] = None
