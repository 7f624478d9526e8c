import logging
from datetime import datetime
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel

from estimator.models.estimate import EstimateSnapshot, EstimatorState

logger = logging.getLogger(__name__)


class SqlSnapshotStore:
    """Estimator state snapshots stored as JSON rows (persistence port for ``EstimatorStore``)."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def create_tables(self) -> None:
        SQLModel.metadata.create_all(self.engine)

    def save(self, state: EstimatorState) -> None:
        payload = state.model_dump_json(by_alias=True)
        with Session(self.engine) as session:
            row = session.get(EstimateSnapshot, state.estimate_id)
            if row is None:
                row = EstimateSnapshot(estimate_id=state.estimate_id, payload=payload)
            else:
                row.payload = payload
                row.updated_at = datetime.utcnow()
            session.add(row)
            session.commit()
        logger.debug("Saved snapshot %s (%d bytes)", state.estimate_id, len(payload))

    def load(self, estimate_id: str) -> Optional[EstimatorState]:
        with Session(self.engine) as session:
            row = session.get(EstimateSnapshot, estimate_id)
            if row is None:
                return None
            payload = row.payload
        try:
            return EstimatorState.model_validate_json(payload)
        except ValidationError:
            logger.exception("Discarding unreadable snapshot %s", estimate_id)
            return None
