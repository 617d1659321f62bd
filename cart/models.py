"""
Data models for the `cart` app.

``CartItem`` is one line of a user's persistent cart. Checkout snapshots the
cart into an ``Order`` with its ``OrderItem`` lines, so later price or title
changes on the listing do not alter what was bought.
"""
from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class CartItem(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cart_items")
    account = models.ForeignKey('catalog.Account', on_delete=models.CASCADE, related_name="cart_items")
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at', 'id']
        constraints = [
            models.UniqueConstraint(fields=['user', 'account'], name='unique_cart_line'),
        ]

    def __str__(self):
        return f"{self.user} - {self.account} x{self.quantity}"

    @property
    def line_total(self) -> Decimal:
        return self.account.price * self.quantity


class Order(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="orders")
    total = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, default=STATUS_PENDING)
    mp_payment_id = models.CharField(max_length=100, null=True, blank=True, help_text="Mercado Pago payment ID")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"Order #{self.pk} - {self.user} - {self.status}"

    @property
    def is_paid(self) -> bool:
        return self.status == self.STATUS_APPROVED


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    account = models.ForeignKey('catalog.Account', on_delete=models.SET_NULL, null=True, blank=True)
    title = models.CharField(max_length=200)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField()

    def __str__(self):
        return f"{self.title} x{self.quantity}"

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity
