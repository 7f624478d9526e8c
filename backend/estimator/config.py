import os
from pathlib import Path
from typing import List

BASE_DIR = Path(__file__).parent.resolve()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./estimator.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

# Catalog / pricing data supplied by the admin tools export
CATALOG_PATH = os.getenv("CATALOG_PATH", str(BASE_DIR / "data" / "catalog.json"))

QUOTE_WEBHOOK_URL = os.getenv("QUOTE_WEBHOOK_URL", "")
QUOTE_WEBHOOK_RETRIES = int(os.getenv("QUOTE_WEBHOOK_RETRIES", "3"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:80")
    return [o.strip() for o in raw.split(",") if o.strip()]
