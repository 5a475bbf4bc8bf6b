"""
Authentication utilities for JWT token management and password hashing

This module provides core authentication functionality including:
- Password hashing with bcrypt
- JWT access token generation
- Token validation and decoding
"""

import jwt
import bcrypt
from datetime import datetime, timedelta, timezone

JWT_ALGORITHM = 'HS256'
ACCESS_TOKEN_EXPIRY = timedelta(hours=1)
DEFAULT_BCRYPT_ROUNDS = 10


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """
    Hash password using bcrypt with a random salt

    Args:
        password: Plain text password to hash
        rounds: bcrypt work factor

    Returns:
        Bcrypt hashed password as string
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash

    Args:
        password: Plain text password to verify
        password_hash: Bcrypt hash to verify against

    Returns:
        True if password matches hash, False otherwise
    """
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        # Malformed stored hash
        return False


def generate_access_token(username: str, secret: str) -> str:
    """
    Generate JWT access token (1 hour expiry)

    Args:
        username: Username to embed as the only identity claim
        secret: HMAC signing secret

    Returns:
        JWT token as string
    """
    now = datetime.now(timezone.utc)
    payload = {
        'username': username,
        'iat': now,
        'exp': now + ACCESS_TOKEN_EXPIRY,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, secret: str) -> dict:
    """
    Decode and validate JWT token

    Args:
        token: JWT token string
        secret: HMAC signing secret

    Returns:
        Decoded token payload

    Raises:
        ValueError: If token is expired or invalid
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            options={'require': ['exp', 'username']},
        )
    except jwt.ExpiredSignatureError:
        raise ValueError('Token has expired')
    except jwt.InvalidTokenError:
        raise ValueError('Invalid token')

    if not isinstance(payload.get('username'), str):
        raise ValueError('Invalid token')
    return payload
