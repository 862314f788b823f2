# =============================================================================
# core/services/card_service.py - Card Business Logic
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import BusinessRuleError, ResourceNotFoundError
from core.models.cards import CardCreate, CardType, CardUpdate
from core.services.account_service import AccountService
from lib.catalogs import CARD_PROVIDERS
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

TABLE = "cards"


class CardService:
    """Service for credit and debit card operations."""

    @staticmethod
    def list_cards(user_id: UUID | str, provider_id: str | None = None) -> list[dict[str, Any]]:
        """List active cards, optionally of one provider."""
        client = SupabaseClient.get_client()
        query = (
            client.table(TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("is_active", True)
        )
        if provider_id:
            query = query.eq("provider_id", provider_id)

        response = SupabaseClient.execute(
            query.order("created_at", desc=False),
            code="CARDS_LIST_FAILED",
            message="Failed to list cards",
        )
        return response.data or []

    @staticmethod
    def get_card(card_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        card = SupabaseClient.fetch_row(TABLE, card_id, user_id=user_id)
        if not card:
            raise ResourceNotFoundError("Card", str(card_id))
        return card

    @staticmethod
    def create_card(user_id: UUID | str, data: CardCreate) -> dict[str, Any]:
        """
        Register a card.

        Field rules are enforced by CardCreate; the linked account, when
        given, must be an active account of the user.
        """
        if data.account_id is not None:
            AccountService.get_active_account(data.account_id, user_id)

        payload = data.model_dump(mode="json")
        payload["user_id"] = str(user_id)
        payload["is_active"] = True

        try:
            card = SupabaseClient.insert_row(TABLE, payload)
        except Exception as e:
            logger.error(f"Failed to create card: {e}")
            raise

        logger.info(f"Created {data.type} card: {card['id']} ({data.provider_id})")
        return card

    @staticmethod
    def update_card(card_id: UUID | str, user_id: UUID | str, data: CardUpdate) -> dict[str, Any]:
        """
        Partially update a card.

        Raises:
            BusinessRuleError: Setting a credit limit on a debit card
        """
        card = CardService.get_card(card_id, user_id)
        updates = data.model_dump(mode="json", exclude_unset=True)
        if not updates:
            return card

        if card.get("type") == CardType.DEBIT.value and updates.get("credit_limit") is not None:
            raise BusinessRuleError(
                "Debit cards have no credit limit",
                code="DEBIT_CARD_LIMIT",
                suggestion="Remove creditLimit from the request",
            )
        if updates.get("account_id"):
            AccountService.get_active_account(updates["account_id"], user_id)

        updated = SupabaseClient.update_row(TABLE, card_id, updates, user_id=user_id)
        logger.info(f"Updated card: {card_id}")
        return updated or {**card, **updates}

    @staticmethod
    def delete_card(card_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """Soft-delete a card."""
        CardService.get_card(card_id, user_id)
        updated = SupabaseClient.update_row(TABLE, card_id, {"is_active": False}, user_id=user_id)
        logger.info(f"Deactivated card: {card_id}")
        return updated

    @staticmethod
    def list_providers() -> list[dict[str, Any]]:
        return CARD_PROVIDERS
