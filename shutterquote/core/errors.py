"""Domain errors raised by the catalog, calculator, store and renderer."""

from __future__ import annotations


class QuotationError(Exception):
    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFound(QuotationError):
    status_code = 404


class Forbidden(QuotationError):
    status_code = 403


class ValidationError(QuotationError):
    status_code = 422


class StorageUnavailable(QuotationError):
    status_code = 503


class RenderingFailure(QuotationError):
    status_code = 500
