"""
Admin configuration for the `catalog` app.
"""
from __future__ import annotations

from django.contrib import admin

from .models import Account, Game, Skin


class SkinInline(admin.TabularInline):
    model = Skin
    extra = 0


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ('title', 'game', 'price', 'bundle', 'featured', 'skins_count', 'created_at')
    list_filter = ('game', 'featured')
    search_fields = ('title', 'bundle', 'skins__name')
    inlines = [SkinInline]

    def skins_count(self, obj):
        return obj.skins.count()
    skins_count.short_description = 'Skins'


@admin.register(Game)
class GameAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'verification', 'display_order')
    list_editable = ('display_order',)
