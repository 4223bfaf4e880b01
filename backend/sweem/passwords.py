"""Password hashing helpers.

Hashes are produced by a passlib `CryptContext` built from
``settings.PASSWORD_SCHEMES``. Every hash is a self-describing
``$<scheme>$...`` string, so a hash made by any configured scheme can be
verified after the default scheme changes.
"""

from typing import Optional

from passlib.context import CryptContext

from .config import settings

PWD_CTX = CryptContext(schemes=settings.PASSWORD_SCHEMES, deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a plaintext password with the default scheme."""
    return PWD_CTX.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check `password` against a stored hash; unknown or malformed hashes never match."""
    try:
        return PWD_CTX.verify(password, password_hash)
    except (ValueError, TypeError):
        return False


def identify_scheme(password_hash: str) -> Optional[str]:
    """Return the scheme name that produced `password_hash`, or None if unrecognised."""
    return PWD_CTX.identify(password_hash, required=False)
