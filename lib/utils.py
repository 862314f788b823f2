# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - UUID normalization for query parameters
# - Money helpers (Decimal arithmetic, 2-place quantization)
# - Month / date helpers
# - Slug generation for board columns
# - Base error class
# =============================================================================

import calendar
import re
import unicodedata
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        account_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        account_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Money Utilities
# =============================================================================

CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """
    Convert a numeric row value to Decimal.

    Postgres `numeric` columns arrive as str, int or float depending on the
    PostgREST version, and nulls are treated as zero.
    """
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(value: Decimal) -> Decimal:
    """Round to cents using banker-unfriendly half-up, like the UI did."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(values: Iterable[Any]) -> Decimal:
    """Sum row amounts exactly and round the result to cents."""
    total = Decimal("0")
    for value in values:
        total += to_decimal(value)
    return quantize_money(total)


# =============================================================================
# Date Utilities
# =============================================================================

# ASCII digits only; years 0000-0999 are rejected since date() needs year >= 1
MONTH_REGEX = r"^[1-9][0-9]{3}-(0[1-9]|1[0-2])$"
MONTH_PATTERN = re.compile(MONTH_REGEX)


def is_valid_month(value: str) -> bool:
    """Check a `YYYY-MM` month string."""
    return bool(MONTH_PATTERN.match(value or ""))


def current_month() -> str:
    """Current month as `YYYY-MM` (UTC)."""
    return datetime.now(timezone.utc).strftime("%Y-%m")


def month_bounds(month: str) -> tuple[date, date]:
    """First and last day of a `YYYY-MM` month."""
    year, mon = (int(part) for part in month.split("-"))
    return date(year, mon, 1), date(year, mon, calendar.monthrange(year, mon)[1])


def month_of(value: str | date | None) -> str | None:
    """Extract `YYYY-MM` from a date or an ISO date/datetime string."""
    if value is None:
        return None
    if isinstance(value, date):
        return value.strftime("%Y-%m")
    return value[:7] if len(value) >= 7 else None


def parse_date(value: str | date | None) -> date | None:
    """Parse an ISO date or datetime string, returning None for garbage."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None


# =============================================================================
# Text Utilities
# =============================================================================

def slugify(value: str, max_length: int = 60) -> str:
    """
    Build a URL-safe slug: lowercase ascii, runs of other chars -> '-'.

    Example:
        slugify("Em Revisão!")  # "em-revisao"
    """
    ascii_value = (
        unicodedata.normalize("NFKD", value)
        .encode("ascii", "ignore")
        .decode("ascii")
        .lower()
    )
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_value).strip("-")
    return slug[:max_length]


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }
