"""
Application configuration for the `catalog` app.
"""
from __future__ import annotations

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    """AppConfig for the catalog app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'catalog'
