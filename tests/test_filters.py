from decimal import Decimal
from types import SimpleNamespace

import pytest

from catalog.filters import filter_accounts, in_price_bucket, parse_min_skins
from catalog.models import accounts_with_skins


def make_account(title, price, skins=(), featured=False, game='valorant', bundle=''):
    return SimpleNamespace(
        title=title,
        price=Decimal(price),
        skin_list=[SimpleNamespace(name=name) for name in skins],
        featured=featured,
        game=SimpleNamespace(slug=game),
        bundle=bundle,
    )


@pytest.fixture
def accounts():
    return [
        make_account("Cheap", "20", ["Classic"]),
        make_account("Mid", "75", ["Vandal", "Phantom"], featured=True),
        make_account("Pricey", "150", ["Knife", "Vandal", "Operator"]),
        make_account("Whale", "450", ["A", "B", "C", "D"], featured=True),
        make_account("Block", "50", ["Sword"], game='minecraft'),
    ]


@pytest.mark.parametrize("price,bucket,expected", [
    ("0", "0-50", True),
    ("50", "0-50", True),
    ("50", "50-100", False),
    ("50.01", "50-100", True),
    ("100", "50-100", True),
    ("100", "100-200", False),
    ("200", "100-200", True),
    ("200", "200+", False),
    ("200.01", "200+", True),
])
def test_price_bucket_boundaries(price, bucket, expected):
    assert in_price_bucket(Decimal(price), bucket) is expected


def test_each_boundary_price_falls_in_exactly_one_bucket():
    buckets = ['0-50', '50-100', '100-200', '200+']
    for price in ("0", "50", "100", "200", "200.01"):
        assert sum(in_price_bucket(Decimal(price), b) for b in buckets) == 1


@pytest.mark.parametrize("sort_by", ['price-asc', 'price-desc', 'skins-asc', 'skins-desc'])
def test_featured_accounts_always_come_first(accounts, sort_by):
    result = filter_accounts(accounts, sort_by=sort_by)
    flags = [a.featured for a in result]
    assert flags == sorted(flags, reverse=True)


def test_sort_order_is_kept_inside_each_group(accounts):
    result = filter_accounts(accounts, sort_by='price-desc')
    assert [a.title for a in result] == ["Whale", "Mid", "Pricey", "Block", "Cheap"]


def test_query_matches_title_skin_name_and_bundle(accounts):
    accounts.append(make_account("Plain", "30", ["Ghost"], bundle="Reaver Collection"))
    assert [a.title for a in filter_accounts(accounts, query="vandal")] == ["Mid", "Pricey"]
    assert [a.title for a in filter_accounts(accounts, query="REAVER")] == ["Plain"]
    assert [a.title for a in filter_accounts(accounts, query="  cheap ")] == ["Cheap"]


def test_game_and_min_skins_filters(accounts):
    result = filter_accounts(accounts, game='valorant', min_skins=3)
    assert [a.title for a in result] == ["Whale", "Pricey"]


def test_unknown_sort_key_keeps_input_order(accounts):
    result = filter_accounts(accounts, sort_by='bogus')
    assert [a.title for a in result] == ["Mid", "Whale", "Cheap", "Pricey", "Block"]


@pytest.mark.parametrize("value,expected", [("3", 3), (2, 2), ("", None), (None, None), ("0", None), ("x", None)])
def test_parse_min_skins(value, expected):
    assert parse_min_skins(value) == expected


def test_elderflame_listed_first_for_mid_range_valorant_accounts(seeded):
    result = filter_accounts(
        accounts_with_skins(), game='valorant', price_bucket='100-200', min_skins=2,
    )
    titles = [a.title for a in result]
    assert titles[0] == "Diamond Account - Elderflame"
    assert "Immortal Smurf - Glitchpop" in titles
    assert all(Decimal(100) < a.price <= Decimal(200) for a in result)
