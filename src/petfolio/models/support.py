"""Pet support tiers offered on the pets page."""

from dataclasses import dataclass
from urllib.parse import quote, urlencode

PAYMENT_PATH = "/pets/payment"


@dataclass(frozen=True)
class SupportTier:
    """A support option. Prices are whole dollars."""

    id: str
    name: str
    price: int
    description: str
    rewards: tuple[str, ...]

    def payment_link(self) -> str:
        """Link to the payment form pre-filled with this tier."""
        return f"{PAYMENT_PATH}?{urlencode({'tier': self.name, 'price': self.price}, quote_via=quote)}"


SUPPORT_TIERS: tuple[SupportTier, ...] = (
    SupportTier(
        id="bambi",
        name="Bambi Photo",
        price=2,
        description="Get a personalized Bambi photo",
        rewards=("One exclusive personalized Bambi photo",),
    ),
    SupportTier(
        id="basic",
        name="Snack Time",
        price=5,
        description="Buy a small treat for my pets",
        rewards=("Exclusive photo of pet enjoying the treat", "Personal thank you message"),
    ),
    SupportTier(
        id="premium",
        name="Meal Time",
        price=10,
        description="Buy a full meal for my pets",
        rewards=(
            "Exclusive video of pet enjoying the meal",
            "Personalized thank you card with pet paw print",
            "Access to private pet photo collection",
        ),
    ),
    SupportTier(
        id="deluxe",
        name="Gourmet Feast",
        price=15,
        description="Treat my pets to a gourmet meal",
        rewards=(
            "Custom pet photoshoot",
            "Personalized video message",
            "Custom profile picture or banner featuring the pets",
            "Monthly pet updates for 3 months",
        ),
    ),
)


def find_tier(tier_id: str) -> SupportTier | None:
    """Look up a tier by id."""
    return next((tier for tier in SUPPORT_TIERS if tier.id == tier_id), None)
