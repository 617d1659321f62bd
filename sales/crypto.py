"""
At-rest encryption for the credentials sellers hand over for review.

Values are encrypted with Fernet. The key comes from
``settings.CREDENTIALS_KEY``; when unset, one is derived from
``SECRET_KEY`` so development setups work without extra configuration.
Rotating ``SECRET_KEY`` without pinning ``CREDENTIALS_KEY`` makes stored
credentials unreadable.
"""
from __future__ import annotations

import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken
from django.conf import settings


class CredentialError(Exception):
    pass


def _fernet() -> Fernet:
    key = settings.CREDENTIALS_KEY
    if not key:
        digest = hashlib.sha256(f"gamehub-credentials:{settings.SECRET_KEY}".encode()).digest()
        key = base64.urlsafe_b64encode(digest).decode()
    return Fernet(key)


def encrypt(value: str) -> str:
    if not value:
        return ""
    return _fernet().encrypt(value.encode()).decode()


def decrypt(token: str) -> str:
    if not token:
        return ""
    try:
        return _fernet().decrypt(token.encode()).decode()
    except InvalidToken as e:
        raise CredentialError("Stored credential could not be decrypted") from e


def mask(value: str) -> str:
    return "•" * 8 if value else ""
