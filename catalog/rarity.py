"""
Skin rarity tiers.

Tags arrive in mixed casing ("Rare", "rare", " LEGENDARY "); everything is
normalized to one canonical lower-case token through ``RARITY_ALIASES``
before it is stored or ranked.
"""
from __future__ import annotations

from typing import Iterable

COMMON = 'common'
RARE = 'rare'
EPIC = 'epic'
LEGENDARY = 'legendary'

RARITY_CHOICES: list[tuple[str, str]] = [
    (COMMON, 'Common'),
    (RARE, 'Rare'),
    (EPIC, 'Epic'),
    (LEGENDARY, 'Legendary'),
]

RARITY_RANK: dict[str, int] = {COMMON: 1, RARE: 2, EPIC: 3, LEGENDARY: 4}

RARITY_ALIASES: dict[str, str] = {tag: tag for tag in RARITY_RANK}

# CSS classes used by the account card
RARITY_COLORS: dict[str, str] = {
    COMMON: 'text-secondary',
    RARE: 'text-primary',
    EPIC: 'text-purple',
    LEGENDARY: 'text-warning',
}


def normalize_rarity(value: str | None) -> str:
    """Maps any casing of a known tier to its canonical tag; unknown -> common."""
    if not value:
        return COMMON
    return RARITY_ALIASES.get(value.strip().lower(), COMMON)


def highest_rarity(skins: Iterable) -> str:
    """Highest tier among ``skins`` (objects with a ``rarity`` attribute)."""
    highest = COMMON
    for skin in skins:
        tier = normalize_rarity(getattr(skin, 'rarity', None))
        if RARITY_RANK[tier] > RARITY_RANK[highest]:
            highest = tier
    return highest
