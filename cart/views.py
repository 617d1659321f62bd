"""
Views for the `cart` app: the cart page, its mutations, checkout and the
Mercado Pago return/webhook endpoints.

Every failed data-store or payment call is logged and surfaced as a
transient message; the cart is left as it was.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from catalog.models import Account

from .forms import QuantityForm
from .models import CartItem, Order
from .payments import PaymentError, create_preference, sync_payment
from .services import MAX_QUANTITY, Cart, EmptyCart

logger = logging.getLogger(__name__)


def _back(request: HttpRequest, default: str = "cart_detail"):
    target = request.POST.get("next") or request.META.get("HTTP_REFERER")
    if target and url_has_allowed_host_and_scheme(target, allowed_hosts={request.get_host()}):
        return redirect(target)
    return redirect(default)


@login_required
def cart_detail(request: HttpRequest) -> HttpResponse:
    cart = Cart(request.user)
    return render(request, "cart/cart.html", {"cart": cart, "items": cart.items(), "max_quantity": MAX_QUANTITY})


@login_required
@require_POST
def add_to_cart(request: HttpRequest, account_id: int) -> HttpResponse:
    account = get_object_or_404(Account, pk=account_id)
    try:
        Cart(request.user).add(account)
    except DatabaseError:
        logger.exception("Failed to add account %s to cart", account_id)
        messages.error(request, "Failed to add to cart")
    else:
        messages.success(request, f"{account.title} added to your cart")
    return _back(request, default="home")


@login_required
@require_POST
def update_cart_item(request: HttpRequest, item_id: int) -> HttpResponse:
    form = QuantityForm(request.POST)
    if not form.is_valid():
        messages.error(request, f"Quantity must be between 0 and {MAX_QUANTITY}")
        return redirect("cart_detail")

    try:
        Cart(request.user).update_quantity(item_id, form.cleaned_data["quantity"])
    except CartItem.DoesNotExist:
        messages.error(request, "That item is no longer in your cart")
    except DatabaseError:
        logger.exception("Failed to update cart item %s", item_id)
        messages.error(request, "Failed to update quantity")
    return redirect("cart_detail")


@login_required
@require_POST
def remove_cart_item(request: HttpRequest, item_id: int) -> HttpResponse:
    try:
        Cart(request.user).remove(item_id)
    except CartItem.DoesNotExist:
        messages.error(request, "That item is no longer in your cart")
    except DatabaseError:
        logger.exception("Failed to remove cart item %s", item_id)
        messages.error(request, "Failed to remove item")
    return redirect("cart_detail")


@login_required
def checkout(request: HttpRequest) -> HttpResponse:
    """GET shows the order summary; POST places the order."""
    cart = Cart(request.user)

    if request.method == "POST":
        try:
            order = cart.checkout()
        except EmptyCart:
            messages.error(request, "Your cart is empty")
            return redirect("cart_detail")
        except DatabaseError:
            logger.exception("Checkout failed for user %s", request.user.pk)
            messages.error(request, "Failed to place your order")
            return redirect("checkout")

        if not settings.PAYMENT:
            messages.success(request, "Purchase completed!")
            return redirect("order_detail", order_id=order.pk)

        request.session['pending_order_id'] = order.pk
        try:
            return redirect(create_preference(request, order))
        except PaymentError:
            messages.error(request, "Could not start the payment. Please try again from your order page.")
            return redirect("order_detail", order_id=order.pk)

    return render(request, "cart/checkout.html", {"cart": cart, "items": cart.items()})


@login_required
def order_detail(request: HttpRequest, order_id: int) -> HttpResponse:
    order = get_object_or_404(Order.objects.prefetch_related('items'), pk=order_id, user=request.user)
    return render(request, "cart/order_detail.html", {"order": order})


@csrf_exempt
def mp_webhook(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        data = request.GET.dict()
        if data.get("type") == "payment" and data.get("data.id"):
            try:
                sync_payment(data["data.id"])
            except DatabaseError:
                logger.exception("Failed to store payment %s", data["data.id"])
                return HttpResponse(status=500)
    return HttpResponse(status=200)


def _payment_result(request: HttpRequest, template: str) -> HttpResponse:
    order = None
    order_id = request.session.get('pending_order_id')
    if order_id:
        order = Order.objects.filter(pk=order_id, user=request.user).first()
    return render(request, template, {"order": order})


@login_required
def payment_success(request: HttpRequest) -> HttpResponse:
    response = _payment_result(request, "cart/payment_success.html")
    request.session.pop('pending_order_id', None)
    return response


@login_required
def payment_failure(request: HttpRequest) -> HttpResponse:
    return _payment_result(request, "cart/payment_failure.html")


@login_required
def payment_pending(request: HttpRequest) -> HttpResponse:
    return _payment_result(request, "cart/payment_pending.html")
