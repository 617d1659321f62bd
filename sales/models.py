"""
Data models for the `sales` app.

A ``SellRequest`` is a seller's proposal to list an account. It starts
``pending`` and is either approved (which creates the catalog ``Account``)
or denied (which deletes it). Games that require extra verification get a
``SellRequestVerification`` row: linked e-mail + password, or the seller's
Discord handle. On a Discord approval the reviewer's handle and the
"friend request sent" flag are stamped there for the seller to see.

Passwords are stored encrypted (see ``sales.crypto``); use the
``set_*``/``get_*`` helpers instead of touching the ``*_encrypted`` fields.
"""
from __future__ import annotations

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from catalog.models import VERIFICATION_CHOICES, VERIFICATION_CREDENTIALS, VERIFICATION_DISCORD

from . import crypto


class SellRequest(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'

    STATUS_CHOICES: list[tuple[str, str]] = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sell_requests")
    title = models.CharField(max_length=200)
    game = models.ForeignKey('catalog.Game', on_delete=models.PROTECT, related_name="sell_requests")
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    amount_of_skins = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    skin_names = models.JSONField(default=list)
    game_username = models.CharField(max_length=150)
    game_password_encrypted = models.TextField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    checker = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_sell_requests",
    )
    checked_at = models.DateTimeField(null=True, blank=True)
    account = models.OneToOneField(
        'catalog.Account', on_delete=models.SET_NULL, null=True, blank=True, related_name="sell_request",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.title} ({self.status})"

    @property
    def is_pending(self) -> bool:
        return self.status == self.STATUS_PENDING

    def set_game_password(self, raw: str) -> None:
        self.game_password_encrypted = crypto.encrypt(raw)

    def get_game_password(self) -> str:
        return crypto.decrypt(self.game_password_encrypted)

    @property
    def verification_or_none(self):
        try:
            return self.verification
        except SellRequestVerification.DoesNotExist:
            return None


class SellRequestVerification(models.Model):
    request = models.OneToOneField(SellRequest, on_delete=models.CASCADE, related_name="verification")
    method = models.CharField(max_length=20, choices=VERIFICATION_CHOICES)

    # credentials path
    email = models.EmailField(blank=True)
    password_encrypted = models.TextField(blank=True)

    # discord path
    discord_handle = models.CharField(max_length=100, blank=True)
    reviewer_discord_handle = models.CharField(max_length=100, blank=True)
    friend_request_sent = models.BooleanField(default=False)
    notice_dismissed = models.BooleanField(default=False)

    def __str__(self):
        return f"{self.request} - {self.method}"

    @property
    def is_discord(self) -> bool:
        return self.method == VERIFICATION_DISCORD

    @property
    def is_credentials(self) -> bool:
        return self.method == VERIFICATION_CREDENTIALS

    def set_password(self, raw: str) -> None:
        self.password_encrypted = crypto.encrypt(raw)

    def get_password(self) -> str:
        return crypto.decrypt(self.password_encrypted)
