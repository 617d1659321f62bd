"""
Admin configuration for the `cart` app.
"""
from __future__ import annotations

from django.contrib import admin

from .models import CartItem, Order, OrderItem


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ('user', 'account', 'quantity', 'created_at')
    search_fields = ('user__username', 'account__title')


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ('account', 'title', 'unit_price', 'quantity')


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin view for Orders."""
    list_display = ('id', 'user', 'total', 'status', 'mp_payment_id', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('user__username', 'mp_payment_id')
    readonly_fields = ('user', 'total', 'created_at', 'updated_at')
    inlines = [OrderItemInline]
