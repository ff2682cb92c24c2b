from __future__ import annotations


class TransportError(Exception):
    """Raised when a customer fetch fails or returns a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidPayloadError(TransportError):
    """Raised when a fetched payload cannot be ingested at all."""


class NotFound(Exception):
    """Raised when no customer matches a requested id."""

    def __init__(self, customer_id: str) -> None:
        super().__init__(f"Customer {customer_id} not found")
        self.customer_id = customer_id


class MalformedPeriodKey(Exception):
    """Raised when a revenue period key has no leading year token."""

    def __init__(self, period_key: str) -> None:
        super().__init__(f"Cannot parse year from period key {period_key!r}")
        self.period_key = period_key


class UnknownSegmentError(Exception):
    pass


class DataNotReadyError(Exception):
    """Raised when a query needs customer data that has not finished loading."""
