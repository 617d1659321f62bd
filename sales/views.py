"""
Views for the `sales` app.

Sellers submit and follow their requests from ``/sell/``; checkers and
admins work the queue from ``/checker/``. Review conflicts and failed
writes are reported with ``django.contrib.messages`` and the page is shown
again.
"""
from __future__ import annotations

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.views.decorators.http import require_POST

from users.models import ROLE_ADMIN, ROLE_CHECKER
from users.permissions import role_required

from . import services
from .crypto import CredentialError, mask
from .forms import ReviewForm, SellRequestForm
from .models import SellRequest

logger = logging.getLogger(__name__)


@login_required
def sell(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = SellRequestForm(request.POST)
        if form.is_valid():
            try:
                services.submit_sell_request(request.user, form.cleaned_data)
            except DatabaseError:
                logger.exception("Failed to store sell request for user %s", request.user.pk)
                messages.error(request, "Failed to submit your request")
            else:
                messages.success(request, "Request submitted! A checker will review it shortly.")
                return redirect("my_requests")
    else:
        form = SellRequestForm()

    return render(request, "sales/sell.html", {"form": form})


@login_required
def my_requests(request: HttpRequest) -> HttpResponse:
    sell_requests = (
        SellRequest.objects.filter(user=request.user)
        .select_related('game', 'verification', 'account')
    )
    return render(request, "sales/my_requests.html", {"sell_requests": sell_requests})


@login_required
@require_POST
def withdraw_request(request: HttpRequest, request_id: int) -> HttpResponse:
    try:
        services.withdraw_request(request_id, request.user)
    except services.ReviewConflict as e:
        messages.error(request, str(e))
    except DatabaseError:
        logger.exception("Failed to withdraw sell request %s", request_id)
        messages.error(request, "Failed to withdraw the request")
    else:
        messages.success(request, "Request withdrawn")
    return redirect("my_requests")


@login_required
def notices(request: HttpRequest) -> JsonResponse:
    """Polled by the "My requests" page."""
    payload = [
        {
            "request_id": verification.request_id,
            "title": verification.request.title,
            "game": verification.request.game.name,
            "reviewer_discord_handle": verification.reviewer_discord_handle,
            "dismiss_url": reverse("dismiss_notice", args=[verification.request_id]),
        }
        for verification in services.pending_notices(request.user)
    ]
    return JsonResponse({"notices": payload})


@login_required
@require_POST
def dismiss_notice(request: HttpRequest, request_id: int) -> HttpResponse:
    dismissed = services.dismiss_notice(request_id, request.user)
    if request.headers.get("x-requested-with") == "XMLHttpRequest":
        return JsonResponse({"dismissed": dismissed})
    return redirect("my_requests")


def _dashboard(request: HttpRequest, revealed: dict | None = None) -> HttpResponse:
    revealed = revealed or {}
    pending = (
        SellRequest.objects.filter(status=SellRequest.STATUS_PENDING)
        .select_related('game', 'user', 'verification')
        .order_by('-created_at')
    )
    rows = []
    for sell_request in pending:
        verification = sell_request.verification_or_none
        rows.append({
            "sell_request": sell_request,
            "verification": verification,
            "masked_password": mask(sell_request.game_password_encrypted),
            "masked_verification_password": mask(verification.password_encrypted) if verification else "",
            "review_form": ReviewForm(auto_id=f"id_review{sell_request.pk}_%s"),
            "revealed": revealed.get(sell_request.pk),
        })
    return render(request, "sales/checker.html", {"rows": rows})


@role_required(ROLE_CHECKER, ROLE_ADMIN)
def checker_dashboard(request: HttpRequest) -> HttpResponse:
    return _dashboard(request)


@role_required(ROLE_CHECKER, ROLE_ADMIN)
@require_POST
def approve_request(request: HttpRequest, request_id: int) -> HttpResponse:
    form = ReviewForm(request.POST)
    form.is_valid()
    handle = form.cleaned_data.get('reviewer_discord_handle', '')

    try:
        account = services.approve_request(request_id, request.user, reviewer_handle=handle)
    except ValidationError as e:
        messages.error(request, " ".join(e.messages))
    except services.ReviewConflict as e:
        messages.warning(request, str(e))
    except DatabaseError:
        logger.exception("Failed to approve sell request %s", request_id)
        messages.error(request, "Failed to approve the request")
    else:
        messages.success(request, f"Request approved and listed as \"{account.title}\"")
    return redirect("checker_dashboard")


@role_required(ROLE_CHECKER, ROLE_ADMIN)
@require_POST
def deny_request(request: HttpRequest, request_id: int) -> HttpResponse:
    try:
        services.deny_request(request_id, request.user)
    except services.ReviewConflict as e:
        messages.warning(request, str(e))
    except DatabaseError:
        logger.exception("Failed to deny sell request %s", request_id)
        messages.error(request, "Failed to deny the request")
    else:
        messages.success(request, "Request denied")
    return redirect("checker_dashboard")


@role_required(ROLE_CHECKER, ROLE_ADMIN)
@require_POST
def reveal_credentials(request: HttpRequest, request_id: int) -> HttpResponse:
    get_object_or_404(SellRequest, pk=request_id)
    try:
        credentials = services.reveal_credentials(request_id, request.user)
    except CredentialError:
        logger.exception("Could not decrypt credentials of sell request %s", request_id)
        messages.error(request, "The stored credentials could not be decrypted")
        return redirect("checker_dashboard")
    return _dashboard(request, revealed={request_id: credentials})
