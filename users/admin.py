"""
Admin configuration for the `users` app.
"""
from __future__ import annotations

from django.contrib import admin

from .models import ActivityLog, Profile, UserRole


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """Admin view for Profiles."""
    list_display = ('user', 'display_name', 'created_at')
    search_fields = ('user__username', 'display_name')


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):
    list_display = ('user', 'role', 'created_at')
    list_filter = ('role',)
    search_fields = ('user__username',)


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    list_display = ('timestamp', 'action', 'user_display', 'details_short')
    list_filter = ('action', 'timestamp')
    search_fields = ('user__username', 'details', 'action')
    readonly_fields = ('timestamp', 'user', 'action', 'details')

    def user_display(self, obj):
        return obj.user.username if obj.user else "Visitor"
    user_display.short_description = 'User'

    def details_short(self, obj):
        return (obj.details[:75] + '...') if obj.details and len(obj.details) > 75 else obj.details
    details_short.short_description = 'Details'
