# market_insights/core/errors.py
# -----------------------------------------------------------------------------
# Error taxonomy
# - InvalidInputError: bad coordinates, raised before any repository access
# - DataAccessError: the store repository failed, never retried here
# -----------------------------------------------------------------------------


class InsightsError(Exception):
    """Base class for everything the insights engine raises on purpose."""


class InvalidInputError(InsightsError):
    pass


class DataAccessError(InsightsError):
    def __init__(self, query: str, message: str):
        self.query = query
        super().__init__(f"{query}: {message}")
