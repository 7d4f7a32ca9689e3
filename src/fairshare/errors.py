from __future__ import annotations

from typing import Any, Mapping


class LedgerError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError, ValueError):
    pass


class NotFoundError(LedgerError, LookupError):
    pass


class ConflictError(LedgerError):
    BALANCE_OUTSTANDING = "balance_outstanding"
    PAYER_DELETED = "payer_deleted"
    INVOLVED_DELETED = "involved_deleted"

    def __init__(self, message: str, reason: str, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.details = dict(details or {})
