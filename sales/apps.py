"""
Application configuration for the `sales` app.
"""
from __future__ import annotations

from django.apps import AppConfig


class SalesConfig(AppConfig):
    """AppConfig for the sales app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'sales'
