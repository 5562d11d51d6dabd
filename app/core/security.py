"""Security utilities for password hashing and session cookie signing."""

import secrets

from jose import JWSError, jws
from passlib.context import CryptContext

# Password hashing
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognised hash
        return False


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def generate_session_token() -> str:
    """Generate an opaque, unguessable session identifier."""
    return secrets.token_urlsafe(32)


def sign_session_token(token: str, secret: str, algorithm: str = "HS256") -> str:
    """
    Sign a session identifier for transport in a cookie.

    Args:
        token: Opaque session identifier
        secret: Signing key
        algorithm: JWS algorithm

    Returns:
        Compact JWS string carrying the identifier
    """
    return jws.sign(token.encode(), secret, algorithm=algorithm)


def unsign_session_token(value: str, secret: str, algorithm: str = "HS256") -> str | None:
    """
    Verify a signed session cookie.

    Args:
        value: Cookie value
        secret: Signing key
        algorithm: Expected JWS algorithm

    Returns:
        The session identifier, or None if the signature does not verify
    """
    try:
        payload = jws.verify(value, secret, algorithms=[algorithm])
    except JWSError:
        return None

    try:
        return payload.decode()
    except UnicodeDecodeError:
        return None
