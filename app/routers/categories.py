# =============================================================================
# app/routers/categories.py - Category Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import CurrentUser
from core.models.transactions import CategoryCreate, CategoryResponse, CategoryType
from core.services.category_service import CategoryService

router = APIRouter()


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    user: CurrentUser,
    type: Annotated[CategoryType | None, Query(description="income or expense; 'both' always matches")] = None,
):
    """The caller's categories followed by the default ones."""
    return CategoryService.list_categories(user.id, category_type=type.value if type else None)


@router.post("", response_model=CategoryResponse)
async def get_or_create_category(body: CategoryCreate, user: CurrentUser):
    """Return the category with this name, creating a user category if none exists."""
    return CategoryService.get_or_create(user.id, body)
