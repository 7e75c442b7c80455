"""
Error taxonomy.

Only three conditions are raised as exceptions:

- a registry lookup that was explicitly asked to fail
  (:class:`ConfigurationError`),
- a failure inside the data store (:class:`StoreFetchError`), which
  orchestrators let through unchanged,
- a request that was superseded by a newer one for the same query
  (:class:`SupersededRequestError`).

Missing data is never an error: it is encoded as ``None`` values and
empty lists.  Unusable numeric fields are dropped from their aggregate.
"""


class AnalyticsError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(AnalyticsError, LookupError):
    """Unknown sport/view pairing (only raised by ``*_or_raise`` lookups)."""


class StoreFetchError(AnalyticsError):
    """A read against the training store failed.

    Raised by store implementations.  Orchestrators do not retry or wrap
    it.
    """

    def __init__(self, operation: str, message: str = ""):
        self.operation = operation
        super().__init__(f"Store operation '{operation}' failed" + (f": {message}" if message else ""))


class SupersededRequestError(AnalyticsError):
    """A newer request for the same logical query was started."""

    def __init__(self, key: str, generation: int, current: int):
        self.key = key
        self.generation = generation
        self.current = current
        super().__init__(f"Request '{key}' generation {generation} superseded by generation {current}")
