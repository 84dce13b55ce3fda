"""Password hashing and access tokens for accounts."""

from datetime import datetime, timedelta
from typing import Optional
import hashlib
import hmac
import os
from jose import JWTError, jwt
from components.core.config import get_settings

settings = get_settings()


def hash_password(password: str, salt: Optional[str] = None) -> str:
    """Salted SHA-256 digest stored as ``salt:hexdigest``."""
    if salt is None:
        salt = os.urandom(32).hex()
    digest = hashlib.sha256(f"{salt}{password}".encode()).hexdigest()
    return f"{salt}:{digest}"


def verify_password(plain_password: str, stored: str) -> bool:
    """Check a password against a stored ``salt:hexdigest`` value."""
    salt, separator, _ = (stored or "").partition(":")
    if not separator:
        return False
    return hmac.compare_digest(hash_password(plain_password, salt), stored)


def create_access_token(account_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Signed bearer token whose subject is the account id."""
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    return jwt.encode({"sub": str(account_id), "exp": expire}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def account_id_from_token(token: str) -> Optional[int]:
    """Account id carried by a valid token, or None."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        return None
    return int(subject)
