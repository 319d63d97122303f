"""Token verification and password hashing.

Tokens are issued elsewhere; this module only resolves an opaque bearer or
cookie token to its payload and hashes new passwords.
"""

from typing import Any, Optional

import bcrypt
import jwt
from fastapi import Request

from .exceptions import AuthError

TOKEN_COOKIE = "token"
BEARER_PREFIX = "Bearer "
BCRYPT_ROUNDS = 10


def extract_token(request: Request) -> Optional[str]:
    """Read the token from the ``token`` cookie, then the Authorization header."""
    token = request.cookies.get(TOKEN_COOKIE)
    if token:
        return token.strip()

    auth_header = request.headers.get("authorization", "")
    if auth_header.startswith(BEARER_PREFIX):
        token = auth_header[len(BEARER_PREFIX):].strip()
        return token or None

    return None


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> dict[str, Any]:
    """Decode and validate a token.

    Args:
        token: Raw token string
        secret: Signing secret
        algorithm: JWT algorithm

    Returns:
        The token payload; it must carry ``userId``

    Raises:
        AuthError: Token expired, tampered with, or missing ``userId``
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthError("Invalid token")

    if not payload.get("userId"):
        raise AuthError("Invalid token")

    return payload


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
