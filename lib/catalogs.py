# =============================================================================
# lib/catalogs.py - Static Catalogs
# =============================================================================
# Banks and card providers are not stored in the database; they ship with
# the API so clients can render pickers without a round trip.
# =============================================================================

from typing import Any

DEFAULT_BANKS: list[dict[str, Any]] = [
    {"id": "nubank", "name": "Nubank", "icon": "💜", "color": "#8A05BE"},
    {"id": "bb", "name": "Banco do Brasil", "icon": "🟡", "color": "#FFED00"},
    {"id": "caixa", "name": "Caixa Econômica", "icon": "🔵", "color": "#0072CE"},
    {"id": "itau", "name": "Itaú", "icon": "🔶", "color": "#EC7000"},
    {"id": "bradesco", "name": "Bradesco", "icon": "🔴", "color": "#CC092F"},
    {"id": "santander", "name": "Santander", "icon": "🔺", "color": "#EC0000"},
    {"id": "inter", "name": "Banco Inter", "icon": "🧡", "color": "#FF7A00"},
    {"id": "c6bank", "name": "C6 Bank", "icon": "💛", "color": "#FFEF00"},
    {"id": "picpay", "name": "PicPay", "icon": "💚", "color": "#21C25E"},
    {"id": "mercadopago", "name": "Mercado Pago", "icon": "💙", "color": "#009EE3"},
    {"id": "xp", "name": "XP Investimentos", "icon": "⚫", "color": "#000000"},
    {"id": "btg", "name": "BTG Pactual", "icon": "⚪", "color": "#1B1B1B"},
    {"id": "other", "name": "Outro Banco", "icon": "🏛️", "color": "#6B7280"},
]


def _provider(
    provider_id: str,
    name: str,
    icon: str,
    color: str,
    brands: list[str],
    supported_types: tuple[str, ...] = ("credit", "debit"),
) -> dict[str, Any]:
    return {
        "id": provider_id,
        "name": name,
        "icon": icon,
        "color": color,
        "popular_brands": brands,
        "supported_types": list(supported_types),
    }


CARD_PROVIDERS: list[dict[str, Any]] = [
    _provider("nubank", "Nubank", "💜", "#8A05BE", ["Nubank", "Nu"]),
    _provider("mercadopago", "Mercado Pago", "💙", "#009EE3", ["Mercado Pago", "MP"]),
    _provider("picpay", "PicPay", "💚", "#21C25E", ["PicPay"]),
    _provider("inter", "Banco Inter", "🧡", "#FF7A00", ["Inter", "Banco Inter"]),
    _provider("c6bank", "C6 Bank", "💛", "#FFEF00", ["C6", "C6 Bank"]),
    _provider("itau", "Itaú", "🔶", "#EC7000", ["Itaú", "Itaucard"]),
    _provider("bradesco", "Bradesco", "🔴", "#CC092F", ["Bradesco", "Bradescard"]),
    _provider("santander", "Santander", "🔺", "#EC0000", ["Santander", "Santander Esfera"]),
    _provider("bb", "Banco do Brasil", "🟡", "#FFED00", ["BB", "Banco do Brasil", "Ourocard"]),
    _provider("caixa", "Caixa Econômica", "🔵", "#0072CE", ["Caixa", "Caixa Econômica"]),
    _provider("xp", "XP Investimentos", "⚫", "#000000", ["XP", "XP Investimentos"]),
    _provider("btg", "BTG Pactual", "⚪", "#1B1B1B", ["BTG", "BTG Pactual"]),
    _provider("other", "Outro", "💳", "#6B7280", []),
]

_PROVIDERS_BY_ID = {provider["id"]: provider for provider in CARD_PROVIDERS}


def get_card_provider(provider_id: str) -> dict[str, Any] | None:
    """Look up a card provider by id."""
    return _PROVIDERS_BY_ID.get(provider_id)


def provider_supports(provider_id: str, card_type: str) -> bool:
    """True if the provider exists and issues cards of this type."""
    provider = get_card_provider(provider_id)
    return provider is not None and card_type in provider["supported_types"]
