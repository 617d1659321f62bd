from decimal import Decimal
from unittest import mock

import pytest
from django.urls import reverse

from cart.models import CartItem, Order
from cart.services import Cart, EmptyCart
from catalog.models import Account


@pytest.fixture
def elderflame(seeded):
    return Account.objects.get(title="Diamond Account - Elderflame")


@pytest.fixture
def glitchpop(seeded):
    return Account.objects.get(title="Immortal Smurf - Glitchpop")


def test_adding_twice_increments_the_line(buyer, elderflame):
    cart = Cart(buyer)
    cart.add(elderflame)
    cart.add(elderflame)
    assert len(cart) == 1
    assert cart.total_items == 2
    assert cart.total_price == Decimal("250.00")


def test_totals_follow_every_mutation(buyer, elderflame, glitchpop):
    cart = Cart(buyer)
    cart.add(elderflame)
    line = cart.add(glitchpop)
    assert cart.total_price == Decimal("314.00")

    cart.update_quantity(line.pk, 3)
    assert cart.total_items == 4
    assert cart.total_price == Decimal("692.00")

    cart.remove(line.pk)
    assert cart.total_price == Decimal("125.00")


def test_quantity_zero_removes_the_line(buyer, elderflame):
    cart = Cart(buyer)
    line = cart.add(elderflame)
    assert cart.update_quantity(line.pk, 0) is None
    assert not CartItem.objects.filter(pk=line.pk).exists()
    assert cart.total_items == 0


def test_cannot_touch_another_users_line(buyer, make_user, elderflame):
    line = Cart(buyer).add(elderflame)
    other = Cart(make_user("other"))
    with pytest.raises(CartItem.DoesNotExist):
        other.update_quantity(line.pk, 5)
    with pytest.raises(CartItem.DoesNotExist):
        other.remove(line.pk)


def test_checkout_snapshots_and_clears(buyer, elderflame, glitchpop, settings):
    settings.PAYMENT = False
    cart = Cart(buyer)
    cart.add(elderflame)
    cart.add(glitchpop)

    order = cart.checkout()

    assert order.total == Decimal("314.00")
    assert order.status == Order.STATUS_APPROVED
    assert sorted(order.items.values_list('title', flat=True)) == [
        "Diamond Account - Elderflame", "Immortal Smurf - Glitchpop",
    ]
    assert cart.total_items == 0


def test_checkout_waits_for_payment_when_enabled(buyer, elderflame, settings):
    settings.PAYMENT = True
    cart = Cart(buyer)
    cart.add(elderflame)
    assert cart.checkout().status == Order.STATUS_PENDING


def test_empty_checkout_is_rejected(buyer):
    with pytest.raises(EmptyCart):
        Cart(buyer).checkout()
    assert not Order.objects.exists()


def test_cart_pages(buyer_client, buyer, elderflame, settings):
    settings.PAYMENT = False
    response = buyer_client.post(reverse("add_to_cart", args=[elderflame.pk]))
    assert response.status_code == 302

    response = buyer_client.get(reverse("cart_detail"))
    assert response.status_code == 200
    assert response.context["cart"].total_items == 1
    assert response.context["cart_total_items"] == 1

    line = CartItem.objects.get(user=buyer)
    buyer_client.post(reverse("update_cart_item", args=[line.pk]), {"quantity": "0"})
    assert not CartItem.objects.filter(user=buyer).exists()

    buyer_client.post(reverse("add_to_cart", args=[elderflame.pk]))
    response = buyer_client.post(reverse("checkout"))
    order = Order.objects.get(user=buyer)
    assert response.status_code == 302
    assert response.url == reverse("order_detail", args=[order.pk])
    assert order.is_paid


@pytest.mark.parametrize("quantity", ["100000000000000000000", "100", "-1", "two"])
def test_out_of_range_quantity_leaves_line_unchanged(buyer_client, buyer, elderflame, quantity):
    line = Cart(buyer).add(elderflame)
    response = buyer_client.post(reverse("update_cart_item", args=[line.pk]), {"quantity": quantity}, follow=True)
    assert response.redirect_chain[-1][0] == reverse("cart_detail")
    assert any("Quantity must be between 0 and 99" in str(m) for m in response.context["messages"])
    line.refresh_from_db()
    assert line.quantity == 1


def test_cart_requires_login(client, db):
    response = client.get(reverse("cart_detail"))
    assert response.status_code == 302
    assert "/accounts/login/" in response.url


def test_webhook_marks_order_paid(client, buyer, elderflame, settings):
    settings.PAYMENT = True
    cart = Cart(buyer)
    cart.add(elderflame)
    order = cart.checkout()

    sdk = mock.Mock()
    sdk.payment.return_value.get.return_value = {
        "response": {"id": 987, "status": "approved", "external_reference": str(order.pk)},
    }
    with mock.patch("cart.payments._sdk", return_value=sdk):
        response = client.post(f"{reverse('mp_webhook')}?type=payment&data.id=987")

    assert response.status_code == 200
    order.refresh_from_db()
    assert order.is_paid
    assert order.mp_payment_id == "987"


def test_failed_preference_sends_buyer_to_order(buyer_client, buyer, elderflame, settings):
    settings.PAYMENT = True
    Cart(buyer).add(elderflame)

    sdk = mock.Mock()
    sdk.preference.return_value.create.return_value = {"status": 500, "response": {"message": "boom"}}
    with mock.patch("cart.payments._sdk", return_value=sdk):
        response = buyer_client.post(reverse("checkout"))

    order = Order.objects.get(user=buyer)
    assert response.url == reverse("order_detail", args=[order.pk])
    assert not order.is_paid
