"""
Catalog filtering and sorting.

``filter_accounts`` is a pure function over an in-memory list of accounts.
Each account needs ``title``, ``bundle``, ``price``, ``featured``,
``game.slug`` and ``skin_list`` (objects with a ``name``). Steps run in a
fixed order: game, text search, price bucket, minimum skin count, sort key,
and finally a stable move of featured accounts to the front.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable

PRICE_BUCKET_CHOICES: list[tuple[str, str]] = [
    ('', 'All Prices'),
    ('0-50', '$0 - $50'),
    ('50-100', '$50 - $100'),
    ('100-200', '$100 - $200'),
    ('200+', '$200+'),
]

SORT_CHOICES: list[tuple[str, str]] = [
    ('price-asc', 'Price: Low to High'),
    ('price-desc', 'Price: High to Low'),
    ('skins-asc', 'Skins: Low to High'),
    ('skins-desc', 'Skins: High to Low'),
]

DEFAULT_SORT = 'price-asc'

SKIN_COUNT_OPTIONS = [1, 2, 3, 4, 5]


def in_price_bucket(price, bucket: str) -> bool:
    """Lower bound exclusive, upper bound inclusive; only 0-50 includes 0."""
    price = Decimal(str(price))
    if bucket == '0-50':
        return Decimal(0) <= price <= Decimal(50)
    if bucket == '50-100':
        return Decimal(50) < price <= Decimal(100)
    if bucket == '100-200':
        return Decimal(100) < price <= Decimal(200)
    if bucket == '200+':
        return price > Decimal(200)
    return True


def _matches_query(account, term: str) -> bool:
    if term in account.title.lower():
        return True
    if any(term in skin.name.lower() for skin in account.skin_list):
        return True
    return bool(account.bundle) and term in account.bundle.lower()


_SORT_KEYS = {
    'price-asc': (lambda a: a.price, False),
    'price-desc': (lambda a: a.price, True),
    'skins-asc': (lambda a: len(a.skin_list), False),
    'skins-desc': (lambda a: len(a.skin_list), True),
}


def filter_accounts(
    accounts: Iterable,
    game: str | None = None,
    query: str = '',
    price_bucket: str = '',
    min_skins: int | None = None,
    sort_by: str = DEFAULT_SORT,
) -> list:
    result = list(accounts)

    if game:
        result = [a for a in result if a.game.slug == game]

    term = (query or '').strip().lower()
    if term:
        result = [a for a in result if _matches_query(a, term)]

    if price_bucket:
        result = [a for a in result if in_price_bucket(a.price, price_bucket)]

    if min_skins:
        result = [a for a in result if len(a.skin_list) >= min_skins]

    if sort_by in _SORT_KEYS:
        key, reverse = _SORT_KEYS[sort_by]
        result.sort(key=key, reverse=reverse)

    # sort() is stable, so the chosen order survives within each group
    result.sort(key=lambda a: not a.featured)
    return result


def parse_min_skins(value) -> int | None:
    try:
        count = int(value)
    except (TypeError, ValueError):
        return None
    return count if count > 0 else None
