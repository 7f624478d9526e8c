import logging

from fastapi import HTTPException

from estimator.db.session import get_engine
from estimator.db.snapshots import SqlSnapshotStore
from estimator.errors import CatalogError
from estimator.models.catalog import CatalogData
from estimator.services import catalog as catalog_service
from estimator.services.workflow import QuoteWorkflowClient

logger = logging.getLogger(__name__)


def get_catalog() -> CatalogData:
    try:
        return catalog_service.get_catalog()
    except CatalogError as e:
        logger.error("Catalog unavailable: %s", e)
        raise HTTPException(status_code=500, detail="Catalog unavailable")


def get_snapshot_store() -> SqlSnapshotStore:
    return SqlSnapshotStore(get_engine())


def get_workflow_client() -> QuoteWorkflowClient:
    return QuoteWorkflowClient()
