import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from estimator import config
from estimator.api import dtf, eligibility, estimate, order, quotes
from estimator.db.session import get_engine
from estimator.db.snapshots import SqlSnapshotStore

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Apparel Print Estimator")

# CORS for the estimator front-end
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(estimate.router, prefix="/estimate", tags=["estimate"])
app.include_router(dtf.router, prefix="/dtf", tags=["dtf"])
app.include_router(order.router, prefix="/order", tags=["order"])
app.include_router(eligibility.router, prefix="/eligibility", tags=["eligibility"])
app.include_router(quotes.router, prefix="/quotes", tags=["quotes"])


@app.on_event("startup")
def on_startup():
    SqlSnapshotStore(get_engine()).create_tables()
    logger.info("Estimator started (database=%s)", config.DATABASE_URL)


@app.get("/")
async def root():
    return {"status": "ok", "service": "apparel-print-estimator"}
