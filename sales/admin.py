"""
Admin configuration for the `sales` app.

Encrypted fields are never shown; use the checker dashboard's reveal action,
which is audited.
"""
from __future__ import annotations

from django.contrib import admin

from .models import SellRequest, SellRequestVerification


class SellRequestVerificationInline(admin.StackedInline):
    model = SellRequestVerification
    extra = 0
    can_delete = False
    exclude = ('password_encrypted',)
    readonly_fields = ('method', 'email', 'discord_handle', 'reviewer_discord_handle', 'friend_request_sent')


@admin.register(SellRequest)
class SellRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'game', 'price', 'amount_of_skins', 'user', 'status', 'checker', 'created_at')
    list_filter = ('status', 'game')
    search_fields = ('title', 'user__username', 'game_username')
    exclude = ('game_password_encrypted',)
    readonly_fields = ('user', 'status', 'checker', 'checked_at', 'account', 'created_at')
    inlines = [SellRequestVerificationInline]
