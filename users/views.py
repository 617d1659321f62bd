"""
Views for the `users` app: the admin-only user/role management screen.
"""
from __future__ import annotations

import logging

from django.contrib import messages
from django.contrib.auth.models import User
from django.db import DatabaseError
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render

from .forms import RoleChangeForm
from .models import ROLE_ADMIN
from .permissions import get_role, role_required
from .utils import set_user_role

logger = logging.getLogger(__name__)


@role_required(ROLE_ADMIN)
def manage_users(request: HttpRequest) -> HttpResponse:
    """Lists every user with their role and lets an admin change it."""
    if request.method == "POST":
        form = RoleChangeForm(request.POST)
        if form.is_valid():
            target = get_object_or_404(User, pk=form.cleaned_data['user_id'])
            try:
                set_user_role(target, form.cleaned_data['role'], actor=request.user)
            except DatabaseError:
                logger.exception("Failed to update role of user %s", target.pk)
                messages.error(request, "Failed to update user role")
            else:
                messages.success(request, "User role updated successfully")
        else:
            messages.error(request, "Failed to update user role")
        return redirect("manage_users")

    users = User.objects.select_related('profile', 'role').order_by('-date_joined')
    rows = [
        {
            'user': user,
            'role': get_role(user),
            'form': RoleChangeForm(initial={'user_id': user.pk, 'role': get_role(user)}, auto_id=f"id_user{user.pk}_%s"),
        }
        for user in users
    ]
    return render(request, "users/manage_users.html", {'rows': rows})
