"""Encryption helpers for secrets stored in the database."""

import os
from functools import lru_cache

from cryptography.fernet import Fernet, InvalidToken


class EncryptionKeyError(RuntimeError):
    """Raised when ENCRYPTION_KEY is missing or not a valid Fernet key."""


@lru_cache
def get_fernet() -> Fernet:
    """Get the Fernet instance built from ENCRYPTION_KEY.

    :returns: Cached Fernet instance.
    :raises EncryptionKeyError: If the key is missing or malformed.
    """
    key = os.environ.get("ENCRYPTION_KEY")
    if not key:
        raise EncryptionKeyError(
            "ENCRYPTION_KEY not configured. "
            'Generate with: python -c "from cryptography.fernet import Fernet; '
            'print(Fernet.generate_key().decode())"'
        )
    try:
        return Fernet(key.encode())
    except ValueError as e:
        raise EncryptionKeyError(f"ENCRYPTION_KEY is not a valid Fernet key: {e}") from e


def encrypt(plaintext: str) -> str:
    """Encrypt a secret for storage."""
    return get_fernet().encrypt(plaintext.encode()).decode()


def decrypt(token: str) -> str:
    """Decrypt a stored secret.

    :raises ValueError: If the token is corrupted or was encrypted with another key.
    """
    try:
        return get_fernet().decrypt(token.encode()).decode()
    except InvalidToken as e:
        raise ValueError("Invalid or corrupted encrypted value") from e


def mask_sensitive(value: str, visible_chars: int = 4) -> str:
    """Mask a secret for display, keeping only its last few characters."""
    if len(value) <= visible_chars:
        return "••••"
    return "••••••••" + value[-visible_chars:]
