# storefront/utils/security.py
from datetime import datetime, timedelta
from typing import Any, Dict

from jose import jwt
from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from storefront.utils.settings import JWT_SECRET, JWT_ALGORITHM

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (UnknownHashError, ValueError):
        return False


def create_access_token(subject: str, issued_at: datetime, ttl: timedelta) -> str:
    to_encode = {
        "sub": subject,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + ttl).timestamp()),
    }
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Rzuca JWTError (w tym ExpiredSignatureError) gdy token jest zly."""
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
