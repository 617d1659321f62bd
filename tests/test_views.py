import pytest
from django.urls import reverse

from catalog.models import Account, Game
from sales.models import SellRequest
from users.models import ROLE_CHECKER


def test_browse_defaults_to_first_game(client, seeded):
    response = client.get(reverse("home"))
    assert response.status_code == 200
    assert response.context["active_game"].slug == "valorant"
    assert response.context["sort_by"] == "price-asc"
    titles = [a.title for a in response.context["accounts"]]
    # featured first, then cheapest
    assert titles == [
        "Radiant Account - Prime Collection",
        "Diamond Account - Elderflame",
        "Immortal Smurf - Glitchpop",
    ]


def test_browse_filters_from_query_string(client, seeded):
    response = client.get(reverse("home"), {"game": "valorant", "price": "100-200", "skins": "2"})
    titles = [a.title for a in response.context["accounts"]]
    assert titles[0] == "Diamond Account - Elderflame"
    assert "Radiant Account - Prime Collection" not in titles


def test_invalid_price_keeps_game_tab(client, seeded):
    response = client.get(reverse("home"), {"game": "minecraft", "price": "bogus"})
    assert response.context["active_game"].slug == "minecraft"
    assert len(response.context["accounts"]) == 3


def test_invalid_skin_count_keeps_search(client, seeded):
    response = client.get(reverse("home"), {"game": "valorant", "q": "elderflame", "skins": "7"})
    assert [a.title for a in response.context["accounts"]] == ["Diamond Account - Elderflame"]


def test_card_shows_highest_rarity_beyond_first_skins(client, seeded):
    pubg = Game.objects.get(slug="pubg")
    account = Account.objects.create(title="Late legendary", game=pubg, price="40")
    for position, (name, rarity) in enumerate([
        ("Pan", "common"), ("Vest", "common"), ("Helmet", "rare"), ("Golden M416", "Legendary"),
    ]):
        account.skins.create(name=name, rarity=rarity, position=position)

    content = client.get(reverse("home"), {"game": "pubg"}).content.decode()
    assert "Golden M416" not in content
    assert "Legendary" in content
    assert 'text-warning" title="Highest rarity"' in content


def test_browse_search_reports_count(client, seeded):
    response = client.get(reverse("home"), {"game": "csgo", "q": "asiimov"})
    assert [a.title for a in response.context["accounts"]] == ["Supreme Master - Asiimov Set"]
    assert 'Found 1 account(s) matching "asiimov"' in response.content.decode()


def test_browse_card_shows_three_skins_and_remainder(client, seeded):
    response = client.get(reverse("home"), {"game": "valorant"})
    content = response.content.decode()
    assert "+2 more skins" in content
    assert "Dragon Knife" not in content


def test_browse_empty_state(client, seeded):
    response = client.get(reverse("home"), {"game": "pubg"})
    assert "No accounts found" in response.content.decode()


def test_user_is_sent_home_from_checker(buyer_client):
    response = buyer_client.get(reverse("checker_dashboard"))
    assert response.status_code == 302
    assert response.url == reverse("home")


def test_checker_is_sent_home_from_user_management(checker_client):
    response = checker_client.get(reverse("manage_users"))
    assert response.status_code == 302
    assert response.url == reverse("home")


def test_anonymous_visitor_is_sent_to_login(client, db):
    response = client.get(reverse("checker_dashboard"))
    assert response.status_code == 302
    assert "/accounts/login/" in response.url


def test_anonymous_navigation_hides_review_links(client, seeded):
    content = client.get(reverse("home")).content.decode()
    assert reverse("checker_dashboard") not in content
    assert reverse("manage_accounts") not in content


def test_checker_sees_checker_link_only(checker_client, seeded):
    content = checker_client.get(reverse("home")).content.decode()
    assert reverse("checker_dashboard") in content
    assert reverse("manage_accounts") not in content


def test_sell_to_approve_flow(client, make_user, valorant):
    seller = make_user("seller")
    reviewer = make_user("reviewer", role=ROLE_CHECKER)

    client.force_login(seller)
    response = client.post(reverse("sell"), {
        "title": "Ascendant Account",
        "game": "valorant",
        "price": "140",
        "amount_of_skins": "2",
        "skin_names": "Ion Vandal\nRGX Sheriff",
        "game_username": "ascendant",
        "game_password": "pw-123",
        "discord_handle": "seller#0001",
    })
    assert response.status_code == 302
    sell_request = SellRequest.objects.get(user=seller)

    client.force_login(reviewer)
    dashboard = client.get(reverse("checker_dashboard"))
    assert "pw-123" not in dashboard.content.decode()

    revealed = client.post(reverse("reveal_credentials", args=[sell_request.pk]))
    assert "pw-123" in revealed.content.decode()

    client.post(reverse("approve_request", args=[sell_request.pk]))
    sell_request.refresh_from_db()
    assert sell_request.is_pending

    client.post(reverse("approve_request", args=[sell_request.pk]), {"reviewer_discord_handle": "checker#4242"})
    sell_request.refresh_from_db()
    assert not sell_request.is_pending
    assert Account.objects.filter(title="Ascendant Account").exists()

    client.force_login(seller)
    notices = client.get(reverse("sell_notices")).json()["notices"]
    assert notices[0]["reviewer_discord_handle"] == "checker#4242"

    client.post(notices[0]["dismiss_url"])
    assert client.get(reverse("sell_notices")).json()["notices"] == []


def test_second_deny_shows_conflict(checker_client, buyer, csgo):
    sell_request = SellRequest.objects.create(
        user=buyer, title="Old account", game=csgo, price="10", amount_of_skins=1,
        skin_names=["P90 Asiimov"], game_username="old", game_password_encrypted="",
    )
    checker_client.post(reverse("deny_request", args=[sell_request.pk]))
    response = checker_client.post(reverse("deny_request", args=[sell_request.pk]), follow=True)
    messages = [str(m) for m in response.context["messages"]]
    assert any("already handled" in m for m in messages)


def test_admin_can_create_account_with_skins(admin_client_role, csgo):
    response = admin_client_role.post(reverse("create_account"), {
        "title": "Silver Smurf",
        "game": csgo.pk,
        "price": "12.50",
        "bundle": "",
        "image_url": "",
        "skins-TOTAL_FORMS": "3",
        "skins-INITIAL_FORMS": "0",
        "skins-MIN_NUM_FORMS": "0",
        "skins-MAX_NUM_FORMS": "1000",
        "skins-0-name": "Glock Fade",
        "skins-0-rarity": "epic",
        "skins-1-name": "AWP Safari",
        "skins-1-rarity": "common",
        "skins-2-name": "",
        "skins-2-rarity": "common",
    })
    assert response.status_code == 302
    account = Account.objects.get(title="Silver Smurf")
    assert [s.name for s in account.skin_list] == ["Glock Fade", "AWP Safari"]


def test_admin_export_is_semicolon_csv(admin_client_role, seeded):
    response = admin_client_role.get(reverse("export_accounts"))
    assert response.status_code == 200
    header = response.content.decode().splitlines()[0]
    assert header.startswith("Title;Game;Price")


def test_game_with_accounts_cannot_be_deleted(admin_client_role, valorant):
    admin_client_role.post(reverse("delete_game", args=[valorant.pk]))
    assert Game.objects.filter(pk=valorant.pk).exists()


@pytest.mark.parametrize("url_name", ["manage_accounts", "manage_games", "manage_users", "export_accounts"])
def test_admin_pages_render(admin_client_role, seeded, url_name):
    assert admin_client_role.get(reverse(url_name)).status_code == 200
