"""Exceptions raised by the order tracking links service."""

from typing import Any, List, Optional


class OrderLinksError(Exception):
    """Base error for the service."""


class InvalidInput(OrderLinksError):
    """Neither a usable order name nor an email was supplied."""


class InvalidConfig(OrderLinksError):
    """Configuration failed validation."""


class ProviderError(OrderLinksError):
    """The order-data provider could not answer the query.

    Covers missing credentials, transport failures, timeouts and errors the
    provider reports in its response. Never retried here.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        errors: Optional[List[Any]] = None,
    ):
        super().__init__(message)
        self.status = status
        self.errors = errors or []
