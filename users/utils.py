import logging

from django.db import transaction

from .models import ROLE_CHOICES, ROLE_USER, ActivityLog, UserRole

logger = logging.getLogger(__name__)

VALID_ROLES = {value for value, _ in ROLE_CHOICES}


def set_user_role(user, role: str, actor=None) -> str:
    """
    Replaces ``user``'s role. The existing row is dropped and a new one is
    inserted only for elevated roles, so ``user`` is never stored.
    """
    if role not in VALID_ROLES:
        raise ValueError(f"Unknown role: {role}")

    with transaction.atomic():
        UserRole.objects.filter(user=user).delete()
        if role != ROLE_USER:
            UserRole.objects.create(user=user, role=role)
        ActivityLog.record(actor, "Change role", f"{user.username} -> {role}")

    logger.info("Role of user %s set to %s", user.pk, role)
    return role
