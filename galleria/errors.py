"""Error types raised by the gallery core."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for failures talking to the Catalog Service."""


class NetworkError(CatalogError):
    """The request never reached the Catalog Service."""


class ServerError(CatalogError):
    """Non-success HTTP status or a `success: false` payload."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class NotFoundError(CatalogError):
    """A named category is absent from the catalog."""


class ContractViolation(RuntimeError):
    """A caller broke a precondition; this is a defect, not a runtime condition."""
