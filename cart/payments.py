"""
Mercado Pago integration for checkout.

``create_preference`` builds the hosted checkout for an order and returns
the URL to redirect the buyer to. ``sync_payment`` is called from the
webhook and copies the payment status back onto the order referenced by
``external_reference``.
"""
from __future__ import annotations

import logging

import mercadopago
from django.conf import settings
from django.urls import reverse

from .models import Order

logger = logging.getLogger(__name__)


class PaymentError(Exception):
    pass


def _sdk() -> mercadopago.SDK:
    return mercadopago.SDK(settings.MERCADOPAGO_ACCESS_TOKEN)


def create_preference(request, order: Order) -> str:
    preference_data = {
        "items": [
            {
                "title": item.title,
                "quantity": item.quantity,
                "unit_price": float(item.unit_price),
                "currency_id": "USD",
            }
            for item in order.items.all()
        ],
        "back_urls": {
            "success": request.build_absolute_uri(reverse('payment_success')),
            "failure": request.build_absolute_uri(reverse('payment_failure')),
            "pending": request.build_absolute_uri(reverse('payment_pending')),
        },
        "auto_return": "approved",
        "external_reference": str(order.pk),
    }

    result = _sdk().preference().create(preference_data)
    preference = result.get("response") or {}
    if "init_point" not in preference:
        logger.error("Mercado Pago preference failed for order %s: %s", order.pk, result)
        raise PaymentError("Could not start the payment")
    return preference["init_point"]


def sync_payment(payment_id: str) -> Order | None:
    payment = _sdk().payment().get(payment_id).get("response") or {}

    order_id = payment.get("external_reference")
    if not order_id:
        logger.warning("Payment %s has no external reference", payment_id)
        return None

    try:
        order = Order.objects.get(pk=order_id)
    except (Order.DoesNotExist, ValueError):
        logger.warning("Payment %s references unknown order %s", payment_id, order_id)
        return None

    order.mp_payment_id = str(payment.get("id", payment_id))
    order.status = payment.get("status") or order.status
    order.save(update_fields=['mp_payment_id', 'status', 'updated_at'])
    logger.info("Order %s is now %s", order.pk, order.status)
    return order
