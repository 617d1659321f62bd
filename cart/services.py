"""
The signed-in user's cart.

``Cart`` is the only writer of ``CartItem`` rows: views, the API and the
context processor all go through it, and the totals are recomputed from
the database after every mutation.
"""
from __future__ import annotations

import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import F

from .models import CartItem, Order, OrderItem

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
MAX_QUANTITY = 99


class EmptyCart(Exception):
    pass


class Cart:

    def __init__(self, user):
        self.user = user
        self._items: list[CartItem] | None = None

    def _queryset(self):
        return CartItem.objects.filter(user=self.user)

    def _invalidate(self) -> None:
        self._items = None

    def items(self) -> list[CartItem]:
        if self._items is None:
            self._items = list(self._queryset().select_related('account', 'account__game'))
        return self._items

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items())

    @property
    def total_price(self) -> Decimal:
        total = sum((item.line_total for item in self.items()), Decimal("0"))
        return total.quantize(CENTS)

    def __len__(self) -> int:
        return len(self.items())

    def add(self, account) -> CartItem:
        """Adds one unit of ``account``; an existing line is incremented."""
        with transaction.atomic():
            item, created = CartItem.objects.get_or_create(
                user=self.user, account=account, defaults={'quantity': 1},
            )
            if not created:
                CartItem.objects.filter(pk=item.pk).update(quantity=F('quantity') + 1)
                item.refresh_from_db(fields=['quantity'])
        self._invalidate()
        logger.info("User %s added account %s to cart (qty=%s)", self.user.pk, account.pk, item.quantity)
        return item

    def update_quantity(self, item_id: int, quantity: int) -> CartItem | None:
        """Sets a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove(item_id)
            return None
        updated = self._queryset().filter(pk=item_id).update(quantity=quantity)
        if not updated:
            raise CartItem.DoesNotExist(f"Cart item {item_id} not found")
        self._invalidate()
        return self._queryset().get(pk=item_id)

    def remove(self, item_id: int) -> None:
        deleted, _ = self._queryset().filter(pk=item_id).delete()
        if not deleted:
            raise CartItem.DoesNotExist(f"Cart item {item_id} not found")
        self._invalidate()

    def clear(self) -> None:
        self._queryset().delete()
        self._invalidate()

    @transaction.atomic
    def checkout(self) -> Order:
        """Snapshots the cart into an ``Order`` and empties it."""
        self._invalidate()
        items = self.items()
        if not items:
            raise EmptyCart("Your cart is empty")

        # Without online payment the purchase completes immediately
        status = Order.STATUS_PENDING if settings.PAYMENT else Order.STATUS_APPROVED
        order = Order.objects.create(user=self.user, total=self.total_price, status=status)
        OrderItem.objects.bulk_create([
            OrderItem(
                order=order,
                account=item.account,
                title=item.account.title,
                unit_price=item.account.price,
                quantity=item.quantity,
            )
            for item in items
        ])
        self.clear()
        logger.info("User %s checked out order %s (%s)", self.user.pk, order.pk, order.total)
        return order
