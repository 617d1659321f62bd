"""
Application configuration for the `users` app.

Importing the models module in ``ready`` wires the ``post_save`` receivers
that give every new user a profile.
"""
from __future__ import annotations

from django.apps import AppConfig


class UsersConfig(AppConfig):
    """AppConfig for the users app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'users'

    def ready(self) -> None:
        from . import models  # noqa: F401
