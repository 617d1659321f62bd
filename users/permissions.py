"""
Role gate shared by the HTML views and the REST API.

Roles are ordered by privilege for navigation purposes
(``user < checker < admin``); each protected screen declares the set of
roles it accepts. Anonymous visitors are sent to the login page, signed-in
visitors without an accepted role are sent back to ``home``.
"""
from __future__ import annotations

from functools import wraps

from django.contrib import messages
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect
from rest_framework import permissions

from .models import ROLE_ADMIN, ROLE_LEVELS, ROLE_USER, UserRole


def get_role(user) -> str:
    if user is None or not user.is_authenticated:
        return ROLE_USER
    if user.is_superuser:
        return ROLE_ADMIN
    try:
        return user.role.role
    except UserRole.DoesNotExist:
        return ROLE_USER


def has_role(user, *roles: str) -> bool:
    return get_role(user) in roles


def at_least(user, role: str) -> bool:
    return ROLE_LEVELS[get_role(user)] >= ROLE_LEVELS[role]


def role_required(*roles: str):
    """Decorator restricting a view to users holding one of ``roles``."""
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped_view(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return redirect_to_login(request.get_full_path())
            if not has_role(request.user, *roles):
                messages.error(request, "You do not have access to that page.")
                return redirect("home")
            return view_func(request, *args, **kwargs)
        return _wrapped_view
    return decorator


class HasRole(permissions.BasePermission):
    """DRF permission: the view declares ``allowed_roles``."""

    def has_permission(self, request, view):
        allowed = getattr(view, 'allowed_roles', ())
        return bool(request.user and request.user.is_authenticated and has_role(request.user, *allowed))


class IsAdminRoleOrReadOnly(permissions.BasePermission):
    """Anyone may read; only admins may write."""

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_authenticated and has_role(request.user, ROLE_ADMIN))
