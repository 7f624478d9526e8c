import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from estimator import config
from estimator.errors import CatalogError
from estimator.models.catalog import CatalogData

logger = logging.getLogger(__name__)


def load_catalog(path: Union[str, Path]) -> CatalogData:
    """Read the catalog / pricing export written by the admin tools."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.exception("Failed to read catalog %s: %s", path, e)
        raise CatalogError(f"cannot read catalog {path}") from e
    try:
        catalog = CatalogData.model_validate(raw)
    except ValidationError as e:
        logger.exception("Catalog %s does not match the expected schema", path)
        raise CatalogError(f"invalid catalog {path}") from e
    logger.info("Loaded catalog %s products=%d", path, len(catalog.products))
    return catalog


@lru_cache()
def get_catalog() -> CatalogData:
    return load_catalog(config.CATALOG_PATH)
