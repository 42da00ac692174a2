"""Storage failure signal.

Raised by the lifecycle store's transaction context when the store times
out or is unavailable. The carried DomainError always has code
STORE_UNAVAILABLE; services catch the exception at the transaction
boundary and return it as ``Failure(error=exc.error)``.
"""

from src.core.errors import DomainError


class StoreUnavailableError(Exception):
    """Transient storage failure (timeout, lost connection, driver error).

    Attributes:
        error: DomainError describing the failure.
    """

    def __init__(self, error: DomainError) -> None:
        super().__init__(error.message)
        self.error = error
