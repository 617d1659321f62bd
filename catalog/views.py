"""
Views for the `catalog` app.

``index`` is the storefront: one tab per game, with search, price bucket,
minimum skin count and sort controls, all carried in the query string so a
filtered listing can be bookmarked. The remaining views are the admin-only
management screens for accounts and games.
"""
from __future__ import annotations

import logging

import pandas as pd
from django.contrib import messages
from django.db import DatabaseError, transaction
from django.db.models import ProtectedError
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_POST

from users.models import ROLE_ADMIN, ActivityLog
from users.permissions import role_required

from .filters import DEFAULT_SORT, SKIN_COUNT_OPTIONS, filter_accounts
from .forms import AccountForm, BrowseForm, GameForm, SkinFormSet
from .models import Account, Game, accounts_with_skins

logger = logging.getLogger(__name__)


def index(request: HttpRequest) -> HttpResponse:
    """Storefront listing for the active game."""
    games = list(Game.objects.all())
    form = BrowseForm(request.GET or None)
    params = {}
    if form.is_bound:
        form.is_valid()
        # Invalid fields are left out of cleaned_data; the others still apply
        params = form.cleaned_data

    active_game = params.get('game') or (games[0].slug if games else None)
    query = params.get('q', '')
    sort_by = params.get('sort') or DEFAULT_SORT

    accounts = filter_accounts(
        accounts_with_skins().filter(game__slug=active_game),
        game=active_game,
        query=query,
        price_bucket=params.get('price', ''),
        min_skins=params.get('skins'),
        sort_by=sort_by,
    )

    context = {
        "games": games,
        "active_game": next((g for g in games if g.slug == active_game), None),
        "form": form,
        "accounts": accounts,
        "query": query,
        "price_filter": params.get('price', ''),
        "skin_count_filter": params.get('skins'),
        "sort_by": sort_by,
        "skin_count_options": SKIN_COUNT_OPTIONS,
    }
    return render(request, "catalog/index.html", context)


@role_required(ROLE_ADMIN)
def manage_accounts(request: HttpRequest) -> HttpResponse:
    accounts = accounts_with_skins().order_by('-created_at')
    return render(request, "catalog/manage_accounts.html", {"accounts": accounts})


@role_required(ROLE_ADMIN)
def edit_account(request: HttpRequest, account_id: int | None = None) -> HttpResponse:
    """Create (no ``account_id``) or edit an account together with its skins."""
    account = get_object_or_404(Account, pk=account_id) if account_id else None

    if request.method == "POST":
        form = AccountForm(request.POST, instance=account)
        formset = SkinFormSet(request.POST, instance=form.instance, prefix="skins")
        if form.is_valid() and formset.is_valid():
            try:
                with transaction.atomic():
                    saved = form.save()
                    formset.instance = saved
                    formset.save(commit=False)
                    for skin in formset.deleted_objects:
                        skin.delete()
                    # Blank extra rows have neither a pk nor changes
                    kept = [
                        f.instance for f in formset.forms
                        if f not in formset.deleted_forms and (f.instance.pk or f.has_changed())
                    ]
                    for position, skin in enumerate(kept):
                        skin.account = saved
                        skin.position = position
                        skin.save()
                    ActivityLog.record(
                        request.user,
                        "Edit account" if account else "Create account",
                        f"#{saved.pk} {saved.title}",
                    )
            except DatabaseError:
                logger.exception("Failed to save account %s", account_id)
                messages.error(request, "Failed to save account")
            else:
                messages.success(request, "Account saved successfully")
                return redirect("manage_accounts")
    else:
        form = AccountForm(instance=account)
        formset = SkinFormSet(instance=account or Account(), prefix="skins")

    return render(request, "catalog/account_form.html", {
        "form": form,
        "formset": formset,
        "account": account,
    })


@role_required(ROLE_ADMIN)
@require_POST
def delete_account(request: HttpRequest, account_id: int) -> HttpResponse:
    account = get_object_or_404(Account, pk=account_id)
    title = account.title
    try:
        account.delete()
    except DatabaseError:
        logger.exception("Failed to delete account %s", account_id)
        messages.error(request, "Failed to delete account")
    else:
        ActivityLog.record(request.user, "Delete account", f"#{account_id} {title}")
        messages.success(request, "Account deleted successfully")
    return redirect("manage_accounts")


@role_required(ROLE_ADMIN)
@require_POST
def toggle_featured(request: HttpRequest, account_id: int) -> HttpResponse:
    account = get_object_or_404(Account, pk=account_id)
    account.featured = not account.featured
    account.save(update_fields=['featured'])
    return redirect("manage_accounts")


@role_required(ROLE_ADMIN)
def export_accounts(request: HttpRequest) -> HttpResponse:
    """Generates a CSV with every listed account using pandas."""
    response = HttpResponse(content_type='text/csv')
    today = timezone.now().strftime('%Y-%m-%d')
    response['Content-Disposition'] = f'attachment; filename="accounts-{today}.csv"'

    rows = [
        {
            'title': account.title,
            'game': account.game.name,
            'price': account.price,
            'bundle': account.bundle,
            'featured': account.featured,
            'skins': len(account.skin_list),
            'highest_rarity': account.highest_rarity,
            'skin_names': ", ".join(skin.name for skin in account.skin_list),
            'created_at': account.created_at,
        }
        for account in accounts_with_skins().order_by('game__display_order', 'title')
    ]
    df = pd.DataFrame(rows, columns=[
        'title', 'game', 'price', 'bundle', 'featured', 'skins', 'highest_rarity', 'skin_names', 'created_at',
    ])
    df.columns = [col.replace('_', ' ').title() for col in df.columns]
    df.to_csv(response, sep=';', index=False, date_format='%d-%m-%Y')

    return response


@role_required(ROLE_ADMIN)
def manage_games(request: HttpRequest) -> HttpResponse:
    """Lists games; POST creates one, or updates the game named by ``game_id``."""
    editing = None
    if request.method == "POST":
        game_id = request.POST.get("game_id")
        editing = get_object_or_404(Game, pk=game_id) if game_id else None
        form = GameForm(request.POST, instance=editing)
        if form.is_valid():
            game = form.save()
            ActivityLog.record(request.user, "Save game", game.slug)
            messages.success(request, "Game saved successfully")
            return redirect("manage_games")
    else:
        form = GameForm()

    games = list(Game.objects.all())
    for game in games:
        game.form = GameForm(instance=game, auto_id=f"id_game{game.pk}_%s")
    return render(request, "catalog/manage_games.html", {"games": games, "form": form, "editing": editing})


@role_required(ROLE_ADMIN)
@require_POST
def delete_game(request: HttpRequest, game_id: int) -> HttpResponse:
    game = get_object_or_404(Game, pk=game_id)
    try:
        game.delete()
    except ProtectedError:
        messages.error(request, "This game still has listed accounts")
    else:
        ActivityLog.record(request.user, "Delete game", game.slug)
        messages.success(request, "Game deleted successfully")
    return redirect("manage_games")
