"""Error kinds raised by the compliance ledger.

Every failure aborts the triggering operation and surfaces unchanged to the
caller. No operation retries internally.

``AlreadyExistsError`` and ``ExpiredError`` are defined for completeness but
are not raised by the current rules: framework registration overwrites, and
expiry is evaluated as a boolean condition on read.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Stable error codes surfaced to callers."""

    OWNER_ONLY = "owner_only"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    UNAUTHORIZED = "unauthorized"
    INVALID_STATUS = "invalid_status"
    INVALID_SCORE = "invalid_score"
    EXPIRED = "expired"


class ComplianceLedgerError(Exception):
    """Base class for all compliance ledger errors.

    Args:
        message: Human-readable description of the failure.
        kind: The stable error code.
    """

    kind: ErrorKind

    def __init__(self, message: str, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class OwnerOnlyError(ComplianceLedgerError):
    """Caller is not the owner on an owner-gated operation."""

    kind = ErrorKind.OWNER_ONLY


class NotFoundError(ComplianceLedgerError):
    """A referenced entity or framework record does not exist."""

    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(ComplianceLedgerError):
    kind = ErrorKind.ALREADY_EXISTS


class UnauthorizedError(ComplianceLedgerError):
    """Caller is not a registered officer on an officer-gated operation."""

    kind = ErrorKind.UNAUTHORIZED


class InvalidStatusError(ComplianceLedgerError):
    """Status code outside the status enum, or severity outside [1, 5]."""

    kind = ErrorKind.INVALID_STATUS


class InvalidScoreError(ComplianceLedgerError):
    """Score outside [0, 100]."""

    kind = ErrorKind.INVALID_SCORE


class ExpiredError(ComplianceLedgerError):
    kind = ErrorKind.EXPIRED
