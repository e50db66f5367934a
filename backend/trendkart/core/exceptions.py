"""
Trendkart - Exceptions

Error hierarchy shared by the trend core and the API layer.
Normalization never raises; only lookups and product validation do.
"""

from typing import Any, Optional


class TrendkartError(Exception):
    """Base exception for all Trendkart errors."""

    code = "TRENDKART_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details or None,
        }


class ValidationError(TrendkartError):
    """Invalid or missing product fields, or an unsupported query option."""

    code = "VALIDATION_ERROR"


class NotFoundError(TrendkartError):
    """Unknown product or alert id."""

    code = "NOT_FOUND"

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(
            f"{kind} not found: {identifier}",
            details={"kind": kind, "id": identifier},
        )
        self.kind = kind
        self.identifier = identifier
