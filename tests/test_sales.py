from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from catalog.models import Account
from sales import services
from sales.forms import SellRequestForm
from sales.models import SellRequest
from users.models import ActivityLog


def form_data(game, **overrides):
    data = {
        "title": "Gold Account",
        "game": game.slug,
        "price": "80.00",
        "amount_of_skins": "2",
        "skin_names": "Prime Vandal\nReaver Knife\n",
        "game_username": "player1",
        "game_password": "hunter2",
    }
    data.update(overrides)
    return data


def submit(user, game, **overrides):
    form = SellRequestForm(form_data(game, **overrides))
    assert form.is_valid(), form.errors
    return services.submit_sell_request(user, form.cleaned_data)


def test_matching_skin_count_is_accepted(csgo):
    form = SellRequestForm(form_data(csgo, skin_names="AWP Asiimov\n\n  \nM4A4 Howl"))
    assert form.is_valid(), form.errors
    assert form.cleaned_data["skin_names"] == ["AWP Asiimov", "M4A4 Howl"]


def test_mismatched_skin_count_is_rejected(csgo):
    form = SellRequestForm(form_data(csgo, amount_of_skins="3"))
    assert not form.is_valid()
    assert "skin_names" in form.errors


def test_blank_skin_names_are_rejected(csgo):
    form = SellRequestForm(form_data(csgo, skin_names="\n  \n"))
    assert not form.is_valid()
    assert "skin_names" in form.errors


def test_credentials_game_requires_linked_email(minecraft):
    form = SellRequestForm(form_data(minecraft))
    assert not form.is_valid()
    assert "verification_email" in form.errors
    assert "verification_password" in form.errors

    form = SellRequestForm(form_data(
        minecraft, verification_email="owner@example.com", verification_password="mail-pass",
    ))
    assert form.is_valid(), form.errors


def test_discord_game_requires_handle(valorant):
    assert "discord_handle" in SellRequestForm(form_data(valorant)).errors
    assert SellRequestForm(form_data(valorant, discord_handle="seller#0001")).is_valid()


def test_credentials_are_encrypted_at_rest(buyer, minecraft):
    sell_request = submit(
        buyer, minecraft, verification_email="owner@example.com", verification_password="mail-pass",
    )
    stored = SellRequest.objects.get(pk=sell_request.pk)
    assert "hunter2" not in stored.game_password_encrypted
    assert stored.get_game_password() == "hunter2"
    assert "mail-pass" not in stored.verification.password_encrypted
    assert stored.verification.get_password() == "mail-pass"


def test_approve_publishes_account(buyer, checker, csgo):
    sell_request = submit(buyer, csgo)

    account = services.approve_request(sell_request.pk, checker)

    sell_request.refresh_from_db()
    assert sell_request.status == SellRequest.STATUS_APPROVED
    assert sell_request.checker == checker
    assert sell_request.checked_at is not None
    assert sell_request.account == account
    assert account.price == Decimal("80.00")
    assert [s.name for s in account.skin_list] == ["Prime Vandal", "Reaver Knife"]
    assert ActivityLog.objects.filter(user=checker, action="Approve sell request").exists()


def test_discord_approval_needs_reviewer_handle(buyer, checker, valorant):
    sell_request = submit(buyer, valorant, discord_handle="seller#0001")
    accounts_before = Account.objects.count()

    with pytest.raises(ValidationError):
        services.approve_request(sell_request.pk, checker, reviewer_handle="  ")

    sell_request.refresh_from_db()
    assert sell_request.status == SellRequest.STATUS_PENDING
    assert Account.objects.count() == accounts_before


def test_discord_approval_creates_seller_notice(buyer, checker, valorant):
    sell_request = submit(buyer, valorant, discord_handle="seller#0001")

    services.approve_request(sell_request.pk, checker, reviewer_handle="checker#4242")

    notices = list(services.pending_notices(buyer))
    assert len(notices) == 1
    assert notices[0].reviewer_discord_handle == "checker#4242"
    assert notices[0].friend_request_sent

    assert services.dismiss_notice(sell_request.pk, buyer)
    assert not services.pending_notices(buyer).exists()


def test_second_approval_conflicts(buyer, checker, store_admin, csgo):
    sell_request = submit(buyer, csgo)
    services.approve_request(sell_request.pk, checker)
    accounts_after_first = Account.objects.count()

    with pytest.raises(services.ReviewConflict):
        services.approve_request(sell_request.pk, store_admin)
    with pytest.raises(services.ReviewConflict):
        services.deny_request(sell_request.pk, store_admin)

    sell_request.refresh_from_db()
    assert sell_request.checker == checker
    assert Account.objects.count() == accounts_after_first


def test_deny_removes_request_once(buyer, checker, csgo):
    sell_request = submit(buyer, csgo)
    services.deny_request(sell_request.pk, checker)
    assert not SellRequest.objects.filter(pk=sell_request.pk).exists()

    with pytest.raises(services.ReviewConflict):
        services.deny_request(sell_request.pk, checker)
    with pytest.raises(services.ReviewConflict):
        services.approve_request(sell_request.pk, checker)


def test_only_owner_can_withdraw_pending_request(buyer, make_user, csgo):
    sell_request = submit(buyer, csgo)
    with pytest.raises(services.ReviewConflict):
        services.withdraw_request(sell_request.pk, make_user("stranger"))
    services.withdraw_request(sell_request.pk, buyer)
    assert not SellRequest.objects.exists()


def test_reveal_is_audited(buyer, checker, minecraft):
    sell_request = submit(
        buyer, minecraft, verification_email="owner@example.com", verification_password="mail-pass",
    )
    credentials = services.reveal_credentials(sell_request.pk, checker)
    assert credentials["game_password"] == "hunter2"
    assert credentials["verification_password"] == "mail-pass"
    assert ActivityLog.objects.filter(user=checker, action="Reveal credentials").count() == 1
