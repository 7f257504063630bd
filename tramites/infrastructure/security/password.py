"""Staff password hashing: bcrypt over a base64 SHA-256 digest.

The digest keeps inputs under bcrypt's 72-byte limit.
"""

import base64
import hashlib

import bcrypt


def _digest(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_digest(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """False for a wrong password or an unparseable stored hash."""
    try:
        return bool(bcrypt.checkpw(_digest(plain_password), password_hash.encode("utf-8")))
    except (ValueError, TypeError):
        return False
