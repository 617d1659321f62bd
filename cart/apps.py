"""
Application configuration for the `cart` app.
"""
from __future__ import annotations

from django.apps import AppConfig


class CartConfig(AppConfig):
    """AppConfig for the cart app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'cart'
