class EstimatorError(Exception):
    """Base class for estimator errors."""


class DesignValidationError(EstimatorError, ValueError):
    """A print design could not be saved.

    ``code`` is one of: noLocation, noColors, noSize, duplicate, inkCount.
    """

    def __init__(self, code: str, message: str = ""):
        self.code = code
        super().__init__(message or code)


class OrderValidationError(EstimatorError, ValueError):
    """A garment selection could not be added (invalidSelection, outOfStock, unknownProduct, brandLocked)."""

    def __init__(self, code: str, message: str = ""):
        self.code = code
        super().__init__(message or code)


class ReorderLockedError(EstimatorError):
    """Print designs of a reorder are read-only."""


class CatalogError(EstimatorError):
    """The catalog / pricing data could not be loaded."""
