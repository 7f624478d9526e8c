import logging

from fastapi import APIRouter, Depends, HTTPException

from estimator.api.deps import get_catalog, get_snapshot_store, get_workflow_client
from estimator.db.snapshots import SqlSnapshotStore
from estimator.models.catalog import CatalogData
from estimator.models.cost import CostDetails
from estimator.models.domain import CamelModel
from estimator.models.estimate import EstimatorState
from estimator.services.state_store import EstimatorStore
from estimator.services.workflow import QuoteWorkflowClient

logger = logging.getLogger(__name__)
router = APIRouter()


class SubmitResponse(CamelModel):
    estimate_id: str
    submitted: bool
    cost: CostDetails


def _load(store: SqlSnapshotStore, estimate_id: str) -> EstimatorState:
    state = store.load(estimate_id)
    if state is None:
        raise HTTPException(status_code=404, detail="estimate not found")
    return state


@router.put("/{estimate_id}", response_model=EstimatorState)
def save_quote(estimate_id: str, state: EstimatorState, store: SqlSnapshotStore = Depends(get_snapshot_store)):
    if state.estimate_id != estimate_id:
        raise HTTPException(status_code=400, detail="estimate id mismatch")
    store.save(state)
    logger.info("Saved estimate %s lines=%d designs=%d", estimate_id, len(state.items), len(state.designs))
    return state


@router.get("/{estimate_id}", response_model=EstimatorState)
def get_quote(estimate_id: str, store: SqlSnapshotStore = Depends(get_snapshot_store)):
    return _load(store, estimate_id)


@router.post("/{estimate_id}/submit", response_model=SubmitResponse)
def submit_quote(
    estimate_id: str,
    store: SqlSnapshotStore = Depends(get_snapshot_store),
    catalog: CatalogData = Depends(get_catalog),
    client: QuoteWorkflowClient = Depends(get_workflow_client),
):
    """Price the saved estimate and forward it to the quote webhook."""
    state = _load(store, estimate_id)
    cost = EstimatorStore(catalog, state=state).cost()
    payload = {
        **state.model_dump(mode="json", by_alias=True),
        "costDetails": cost.model_dump(mode="json", by_alias=True),
    }
    submitted = client.submit(payload)
    logger.info("Quote %s submitted=%s total=%s", estimate_id, submitted, cost.total_cost_with_tax)
    return SubmitResponse(estimate_id=estimate_id, submitted=submitted, cost=cost)
