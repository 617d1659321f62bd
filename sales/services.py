"""
Sell-request transitions.

A request only ever moves ``pending -> approved`` or ``pending -> deleted``.
Both moves are conditional writes on ``status='pending'``: when two
reviewers act on the same request the first write wins and the second one
matches no row and raises ``ReviewConflict`` without touching anything.
"""
from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from catalog.models import VERIFICATION_DISCORD, VERIFICATION_NONE, Account, Skin
from catalog.rarity import COMMON
from users.models import ActivityLog

from .models import SellRequest, SellRequestVerification

logger = logging.getLogger(__name__)


class ReviewConflict(Exception):
    """The request is no longer pending; somebody else already handled it."""


@transaction.atomic
def submit_sell_request(user, data: dict) -> SellRequest:
    """Creates a pending request from ``SellRequestForm.cleaned_data`` (or the API equivalent)."""
    game = data['game']
    sell_request = SellRequest(
        user=user,
        title=data['title'],
        game=game,
        price=data['price'],
        amount_of_skins=data['amount_of_skins'],
        skin_names=list(data['skin_names']),
        game_username=data['game_username'],
    )
    sell_request.set_game_password(data['game_password'])
    sell_request.save()

    if game.verification != VERIFICATION_NONE:
        verification = SellRequestVerification(
            request=sell_request,
            method=game.verification,
            email=data.get('verification_email') or '',
            discord_handle=data.get('discord_handle') or '',
        )
        verification.set_password(data.get('verification_password') or '')
        verification.save()

    logger.info("User %s submitted sell request %s for %s", user.pk, sell_request.pk, game.slug)
    return sell_request


def _get_for_review(request_id: int) -> SellRequest:
    try:
        return SellRequest.objects.select_related('game').get(pk=request_id)
    except SellRequest.DoesNotExist as e:
        raise ReviewConflict("This request was already handled by another reviewer.") from e


@transaction.atomic
def approve_request(request_id: int, reviewer, reviewer_handle: str | None = None) -> Account:
    """
    Marks the request approved and publishes it as a catalog ``Account`` with
    one common-rarity skin per submitted name. Discord-verified requests need
    the reviewer's own handle, which is shown to the seller along with the
    "friend request sent" notice.
    """
    sell_request = _get_for_review(request_id)
    verification = sell_request.verification_or_none
    reviewer_handle = (reviewer_handle or '').strip()

    if verification is not None and verification.is_discord and not reviewer_handle:
        raise ValidationError("Enter your Discord handle before approving a Discord verified request.")

    updated = SellRequest.objects.filter(pk=request_id, status=SellRequest.STATUS_PENDING).update(
        status=SellRequest.STATUS_APPROVED,
        checker=reviewer,
        checked_at=timezone.now(),
    )
    if not updated:
        raise ReviewConflict("This request was already handled by another reviewer.")

    account = Account.objects.create(
        title=sell_request.title,
        game=sell_request.game,
        price=sell_request.price,
    )
    Skin.objects.bulk_create([
        Skin(account=account, name=name, rarity=COMMON, position=position)
        for position, name in enumerate(sell_request.skin_names)
    ])
    SellRequest.objects.filter(pk=request_id).update(account=account)

    if verification is not None and verification.is_discord:
        verification.reviewer_discord_handle = reviewer_handle
        verification.friend_request_sent = True
        verification.save(update_fields=['reviewer_discord_handle', 'friend_request_sent'])

    ActivityLog.record(reviewer, "Approve sell request", f"#{request_id} {sell_request.title} -> account #{account.pk}")
    logger.info("Sell request %s approved by %s", request_id, getattr(reviewer, 'pk', None))
    return account


@transaction.atomic
def deny_request(request_id: int, reviewer) -> None:
    """Removes a pending request; its verification row goes with it."""
    title = SellRequest.objects.filter(pk=request_id).values_list('title', flat=True).first()
    deleted, _ = SellRequest.objects.filter(pk=request_id, status=SellRequest.STATUS_PENDING).delete()
    if not deleted:
        raise ReviewConflict("This request was already handled by another reviewer.")

    ActivityLog.record(reviewer, "Deny sell request", f"#{request_id} {title}")
    logger.info("Sell request %s denied by %s", request_id, getattr(reviewer, 'pk', None))


def withdraw_request(request_id: int, user) -> None:
    deleted, _ = SellRequest.objects.filter(
        pk=request_id, user=user, status=SellRequest.STATUS_PENDING,
    ).delete()
    if not deleted:
        raise ReviewConflict("Only pending requests can be withdrawn.")
    logger.info("User %s withdrew sell request %s", user.pk, request_id)


def reveal_credentials(request_id: int, reviewer) -> dict[str, str]:
    sell_request = SellRequest.objects.select_related('verification').get(pk=request_id)
    verification = sell_request.verification_or_none

    credentials = {
        'game_username': sell_request.game_username,
        'game_password': sell_request.get_game_password(),
        'verification_email': verification.email if verification else '',
        'verification_password': verification.get_password() if verification else '',
    }
    ActivityLog.record(reviewer, "Reveal credentials", f"#{request_id} {sell_request.title}")
    logger.info("Credentials of sell request %s revealed to %s", request_id, getattr(reviewer, 'pk', None))
    return credentials


def pending_notices(user):
    """Approved Discord requests whose friend request the seller has not dismissed yet."""
    return SellRequestVerification.objects.filter(
        request__user=user,
        request__status=SellRequest.STATUS_APPROVED,
        method=VERIFICATION_DISCORD,
        friend_request_sent=True,
        notice_dismissed=False,
    ).select_related('request', 'request__game')


def dismiss_notice(request_id: int, user) -> bool:
    updated = SellRequestVerification.objects.filter(
        request_id=request_id, request__user=user,
    ).update(notice_dismissed=True)
    return bool(updated)
