"""Password hashing and JWT helpers."""
from __future__ import annotations
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import jwt

from teamboard.core import config


# ------------------------------------------------------------------
# Password hashing
# ------------------------------------------------------------------
def hash_password(password: str) -> str:
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pwd_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8")
        )
    except ValueError:
        return False


# ------------------------------------------------------------------
# JWT helpers
# ------------------------------------------------------------------
def create_token(email: str, name: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "email": email,
        "name": name,
        "exp": expire,
    }
    return jwt.encode(payload, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_token(token: str) -> dict:
    """Return the token claims. Raises ``jose.JWTError`` on a bad or expired token."""
    return jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
