"""
Data models for the `catalog` app.

``Game`` is a storefront tab and also decides which extra verification a
seller has to provide. ``Account`` is a listed gaming account with its
ordered ``Skin`` list. Accounts are created by admins or by approving a
sell-request.
"""
from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from .rarity import RARITY_CHOICES, COMMON, highest_rarity, normalize_rarity

VERIFICATION_NONE = 'none'
VERIFICATION_CREDENTIALS = 'credentials'
VERIFICATION_DISCORD = 'discord'

VERIFICATION_CHOICES: list[tuple[str, str]] = [
    (VERIFICATION_NONE, 'None'),
    (VERIFICATION_CREDENTIALS, 'Linked e-mail + password'),
    (VERIFICATION_DISCORD, 'Discord handle'),
]


class Game(models.Model):
    slug = models.SlugField(max_length=50, unique=True)
    name = models.CharField(max_length=100)
    verification = models.CharField(max_length=20, choices=VERIFICATION_CHOICES, default=VERIFICATION_NONE)
    default_image_url = models.URLField(max_length=500, blank=True)
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['display_order', 'name']

    def __str__(self):
        return self.name


class Account(models.Model):
    """A gaming account listed for sale."""
    title = models.CharField(max_length=200)
    game = models.ForeignKey(Game, on_delete=models.PROTECT, related_name="accounts")
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    bundle = models.CharField(max_length=200, blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    featured = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.title} ({self.price})"

    @property
    def skin_list(self) -> list:
        # Uses the prefetch cache when the queryset was built by accounts_with_skins()
        return list(self.skins.all())

    @property
    def skin_count(self) -> int:
        return len(self.skin_list)

    @property
    def highest_rarity(self) -> str:
        return highest_rarity(self.skin_list)

    @property
    def display_image(self) -> str:
        return self.image_url or self.game.default_image_url


class Skin(models.Model):
    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name="skins")
    name = models.CharField(max_length=200)
    rarity = models.CharField(max_length=20, choices=RARITY_CHOICES, default=COMMON)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.rarity = normalize_rarity(self.rarity)
        super().save(*args, **kwargs)


def accounts_with_skins():
    """Base queryset for anything that looks at an account's skins."""
    return Account.objects.select_related('game').prefetch_related('skins')
