# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides generic, user-scoped helpers for the table endpoints:
# - fetch a single row by id (optionally scoped to a user)
# - insert / update / delete rows and return the affected rows
# - execute an arbitrary query builder with uniform error wrapping
#
# The service-role key bypasses Row Level Security, so every helper that
# accepts a user_id adds an explicit `user_id = ...` filter.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   account = SupabaseClient.fetch_row("bank_accounts", account_id, user_id=user.id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError, normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgreSQL error code for unique_violation
UNIQUE_VIOLATION = "23505"


class SupabaseClientError(ApplicationError):
    """
    Error during Supabase operations.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        pg_code: str | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)
        self.pg_code = pg_code

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def is_unique_violation(error: Exception) -> bool:
    """Check whether a backend error is a Postgres unique_violation."""
    code = getattr(error, "pg_code", None) or getattr(error, "code", None)
    return code == UNIQUE_VIOLATION


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        # Fetch an account only if it belongs to the caller
        account = SupabaseClient.fetch_row(
            "bank_accounts",
            "550e8400-...",
            user_id=user.id,
        )
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return normalize_uuid(uuid_value)

    # -------------------------------------------------------------------------
    # Query Execution
    # -------------------------------------------------------------------------

    @classmethod
    def execute(
        cls,
        query: Any,
        code: str = "QUERY_FAILED",
        message: str = "Query failed",
        details: dict[str, Any] | None = None,
    ) -> Any:
        """
        Execute a query builder, wrapping backend errors.

        Args:
            query: A postgrest query builder (anything with .execute())
            code: Error code to use if the query fails
            message: Error message prefix
            details: Extra context attached to the error

        Returns:
            The postgrest APIResponse (has .data and .count)

        Raises:
            SupabaseClientError: If the backend rejects the query
        """
        try:
            return query.execute()
        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"{message}: {e}",
                code=code,
                details=details or {},
                pg_code=getattr(e, "code", None),
            )

    # -------------------------------------------------------------------------
    # Row Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_row(
        cls,
        table: str,
        row_id: str | UUID,
        user_id: str | UUID | None = None,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch one row by id.

        Args:
            table: Table name
            row_id: Primary key value
            user_id: If provided, the row must belong to this user
            columns: PostgREST select list

        Returns:
            Row dict, or None if not found (or owned by someone else)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        row_id_str = cls._normalize_uuid(row_id)

        query = client.table(table).select(columns).eq("id", row_id_str)
        if user_id is not None:
            query = query.eq("user_id", cls._normalize_uuid(user_id))

        response = cls.execute(
            query.limit(1),
            code="FETCH_ROW_FAILED",
            message=f"Failed to fetch {table} row",
            details={"table": table, "id": row_id_str},
        )
        rows = response.data or []
        return rows[0] if rows else None

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert one row and return it with generated columns (id, created_at).

        Raises:
            SupabaseClientError: If insert fails or returns nothing
        """
        client = cls.get_client()
        response = cls.execute(
            client.table(table).insert(data),
            code="INSERT_FAILED",
            message=f"Failed to insert into {table}",
            details={"table": table},
        )

        if response.data:
            logger.debug(f"Inserted row into {table}: {response.data[0].get('id')}")
            return response.data[0]
        raise SupabaseClientError(
            message=f"Insert into {table} returned no data",
            code="INSERT_NO_DATA",
            details={"table": table},
        )

    @classmethod
    def insert_rows(cls, table: str, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Bulk insert; returns the inserted rows."""
        if not rows:
            return []
        client = cls.get_client()
        response = cls.execute(
            client.table(table).insert(rows),
            code="INSERT_FAILED",
            message=f"Failed to insert into {table}",
            details={"table": table, "count": len(rows)},
        )
        return response.data or []

    @classmethod
    def update_row(
        cls,
        table: str,
        row_id: str | UUID,
        data: dict[str, Any],
        user_id: str | UUID | None = None,
    ) -> dict[str, Any] | None:
        """
        Update one row by id.

        Returns:
            The updated row, or None if nothing matched

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()
        row_id_str = cls._normalize_uuid(row_id)

        query = client.table(table).update(data).eq("id", row_id_str)
        if user_id is not None:
            query = query.eq("user_id", cls._normalize_uuid(user_id))

        response = cls.execute(
            query,
            code="UPDATE_FAILED",
            message=f"Failed to update {table} row",
            details={"table": table, "id": row_id_str},
        )
        rows = response.data or []
        return rows[0] if rows else None

    @classmethod
    def delete_row(
        cls,
        table: str,
        row_id: str | UUID,
        user_id: str | UUID | None = None,
    ) -> bool:
        """
        Hard-delete one row by id.

        Returns:
            True if a row was deleted
        """
        client = cls.get_client()
        row_id_str = cls._normalize_uuid(row_id)

        query = client.table(table).delete().eq("id", row_id_str)
        if user_id is not None:
            query = query.eq("user_id", cls._normalize_uuid(user_id))

        response = cls.execute(
            query,
            code="DELETE_FAILED",
            message=f"Failed to delete {table} row",
            details={"table": table, "id": row_id_str},
        )
        return bool(response.data)
