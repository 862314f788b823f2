# =============================================================================
# app/routers/cards.py - Card Endpoints
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query

from app.dependencies import CurrentUser
from core.models.cards import CardCreate, CardProvider, CardResponse, CardUpdate
from core.services.card_service import CardService

router = APIRouter()

CardId = Annotated[UUID, Path(description="Card UUID")]


@router.get("", response_model=list[CardResponse])
async def list_cards(
    user: CurrentUser,
    provider_id: Annotated[str | None, Query(alias="providerId")] = None,
):
    return CardService.list_cards(user.id, provider_id=provider_id)


@router.get("/providers", response_model=list[CardProvider])
async def list_providers():
    """Card providers catalog with the card types each one issues."""
    return CardService.list_providers()


@router.post("", response_model=CardResponse, status_code=201)
async def create_card(body: CardCreate, user: CurrentUser):
    """
    Register a card.

    lastFourDigits must be exactly 4 digits; debit cards take no creditLimit.
    """
    return CardService.create_card(user.id, body)


@router.get("/{card_id}", response_model=CardResponse)
async def get_card(card_id: CardId, user: CurrentUser):
    return CardService.get_card(card_id, user.id)


@router.patch("/{card_id}", response_model=CardResponse)
async def update_card(card_id: CardId, body: CardUpdate, user: CurrentUser):
    return CardService.update_card(card_id, user.id, body)


@router.delete("/{card_id}", response_model=CardResponse)
async def delete_card(card_id: CardId, user: CurrentUser):
    return CardService.delete_card(card_id, user.id)
