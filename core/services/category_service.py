# =============================================================================
# core/services/category_service.py - Category Lookup
# =============================================================================
# Categories are either the user's own or defaults shared by everyone
# (user_id IS NULL). Transactions refer to them by id, clients by name.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from core.models.transactions import CategoryCreate, CategoryType
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

TABLE = "categories"


class CategoryService:
    """Service for category listing and get-or-create."""

    @staticmethod
    def list_categories(user_id: UUID | str, category_type: str | None = None) -> list[dict[str, Any]]:
        """
        Categories visible to the user, own ones first, then defaults.

        Args:
            user_id: Owner
            category_type: "income" or "expense"; categories of type "both"
                always match
        """
        client = SupabaseClient.get_client()
        own = SupabaseClient.execute(
            client.table(TABLE).select("*").eq("user_id", str(user_id)).order("name"),
            code="CATEGORIES_LIST_FAILED",
            message="Failed to list categories",
        )
        defaults = SupabaseClient.execute(
            client.table(TABLE).select("*").is_("user_id", "null").order("name"),
            code="CATEGORIES_LIST_FAILED",
            message="Failed to list default categories",
        )
        categories = (own.data or []) + (defaults.data or [])

        if category_type:
            categories = [
                c for c in categories
                if c.get("type") in (category_type, CategoryType.BOTH.value)
            ]
        return categories

    @staticmethod
    def find_by_name(user_id: UUID | str, name: str) -> dict[str, Any] | None:
        """Case-sensitive name lookup; the user's category wins over a default."""
        client = SupabaseClient.get_client()
        own = SupabaseClient.execute(
            client.table(TABLE).select("*").eq("user_id", str(user_id)).eq("name", name).limit(1),
            code="CATEGORY_LOOKUP_FAILED",
            message="Failed to look up category",
            details={"name": name},
        )
        if own.data:
            return own.data[0]

        default = SupabaseClient.execute(
            client.table(TABLE).select("*").is_("user_id", "null").eq("name", name).limit(1),
            code="CATEGORY_LOOKUP_FAILED",
            message="Failed to look up default category",
            details={"name": name},
        )
        return default.data[0] if default.data else None

    @staticmethod
    def get_or_create(user_id: UUID | str, data: CategoryCreate) -> dict[str, Any]:
        """
        Resolve a category name to a row, creating a user category if needed.

        Returns:
            The existing (user or default) row, or the newly created one
        """
        existing = CategoryService.find_by_name(user_id, data.name)
        if existing:
            return existing

        payload = data.model_dump()
        payload["user_id"] = str(user_id)
        payload["is_default"] = False

        try:
            category = SupabaseClient.insert_row(TABLE, payload)
        except Exception as e:
            logger.error(f"Failed to create category '{data.name}': {e}")
            raise

        logger.info(f"Created category: {category['id']} ({data.name})")
        return category

    @staticmethod
    def names_by_id(user_id: UUID | str) -> dict[str, str]:
        """Map of category id -> name for everything the user can see."""
        return {str(c["id"]): c["name"] for c in CategoryService.list_categories(user_id)}
