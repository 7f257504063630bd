"""Staff authentication primitives."""

from tramites.infrastructure.security.jwt import create_access_token, verify_token
from tramites.infrastructure.security.password import hash_password, verify_password

__all__ = ["create_access_token", "hash_password", "verify_password", "verify_token"]
