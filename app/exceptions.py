# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)


class AurumException(Exception):
    """
    Base exception for the Aurum API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "AURUM_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Lookup Exceptions
# =============================================================================

class ResourceNotFoundError(AurumException):
    """Raised when a row doesn't exist or belongs to another user."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource} not found: {resource_id}",
            code=f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {resource.lower()} id is correct and belongs to you",
            details={"resource": resource, "id": str(resource_id)}
        )


# =============================================================================
# Business Rule Exceptions
# =============================================================================

class BusinessRuleError(AurumException):
    """Raised when a request is well-formed but breaks a domain rule."""

    def __init__(
        self,
        message: str,
        code: str = "BUSINESS_RULE_VIOLATION",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        status_code: int = 400,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status_code,
            suggestion=suggestion,
            details=details,
        )


class InactiveAccountError(BusinessRuleError):
    """Raised when an operation references a soft-deleted account."""

    def __init__(self, account_id: str):
        super().__init__(
            message=f"Account is inactive: {account_id}",
            code="ACCOUNT_INACTIVE",
            suggestion="Pick an active account or reactivate this one first",
            details={"account_id": str(account_id)},
        )


class SameAccountTransferError(BusinessRuleError):
    """Raised when a transfer's source and destination are the same account."""

    def __init__(self, account_id: str):
        super().__init__(
            message="Source and destination accounts must be different",
            code="SAME_ACCOUNT_TRANSFER",
            suggestion="Choose a different destination account",
            details={"account_id": str(account_id)},
        )


class InsufficientBalanceError(BusinessRuleError):
    """Raised when the source account cannot cover a transfer."""

    def __init__(self, account_id: str, balance: float, amount: float):
        super().__init__(
            message=f"Insufficient balance: {balance:.2f} available, {amount:.2f} requested",
            code="INSUFFICIENT_BALANCE",
            suggestion="Lower the amount or add funds to the source account",
            details={"account_id": str(account_id), "balance": balance, "amount": amount},
        )


class LastBoardError(BusinessRuleError):
    """Raised when deleting the only board of a project."""

    def __init__(self, board_id: str):
        super().__init__(
            message="Cannot delete the only board of a project",
            code="LAST_BOARD",
            status_code=409,
            suggestion="Create another board before deleting this one",
            details={"board_id": str(board_id)},
        )


class EmptyReportError(BusinessRuleError):
    """Raised when saving a financial report with no transactions."""

    def __init__(self, period_start: str, period_end: str):
        super().__init__(
            message=f"No transactions between {period_start} and {period_end}",
            code="EMPTY_REPORT",
            suggestion="Widen the date range or register transactions first",
            details={"period_start": period_start, "period_end": period_end},
        )


class WorkspaceCreationError(AurumException):
    """Raised when the default task workspace cannot be created."""

    def __init__(self, attempts: int):
        super().__init__(
            message=f"Could not create the default task project after {attempts} attempts",
            code="WORKSPACE_CREATION_FAILED",
            status_code=409,
            suggestion="Create a project manually with a unique code",
            details={"attempts": attempts},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def aurum_exception_handler(
    request: Request,
    exc: AurumException
) -> JSONResponse:
    """
    Convert AurumException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def supabase_exception_handler(
    request: Request,
    exc: SupabaseClientError
) -> JSONResponse:
    """Backend failures surface as 502 with the wrapper's code."""
    logger.error(f"Supabase error on {request.url.path}: {exc}")
    content = {
        "detail": exc.message,
        "code": exc.code,
    }
    if exc.suggestion:
        content["suggestion"] = exc.suggestion
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=502, content=content)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
