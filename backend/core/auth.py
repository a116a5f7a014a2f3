"""Signed bearer tokens guarding the history API."""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt

from config.settings import get_settings
from core.errors import AuthError, ConfigError

JWT_ALG = "HS256"
HISTORY_SCOPE = "history"

security = HTTPBearer(auto_error=False)


def _get_secret() -> str:
    secret = (get_settings().HISTORY_TOKEN_SECRET or "").strip()
    if not secret:
        raise ConfigError("HISTORY_TOKEN_SECRET is not configured.")
    return secret


def issue_history_token(subject: str, expires_minutes: Optional[int] = None) -> str:
    """
    Create a signed token granting access to the history API.

    Args:
        subject: who the token is issued to (stored in the ``sub`` claim)
        expires_minutes: lifetime; defaults to HISTORY_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT string
    """
    if expires_minutes is None:
        expires_minutes = get_settings().HISTORY_TOKEN_EXPIRE_MINUTES
    now = datetime.now(tz=timezone.utc)
    payload = {
        "sub": subject,
        "scope": HISTORY_SCOPE,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, _get_secret(), algorithm=JWT_ALG)


def verify_history_token(token: str) -> Dict[str, Any]:
    """Decode a token and check its scope; raises AuthError if it is not acceptable."""
    secret = _get_secret()
    try:
        claims = jwt.decode(token, secret, algorithms=[JWT_ALG], options={"require": ["exp", "sub"]})
    except jwt.ExpiredSignatureError:
        raise AuthError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthError("Invalid token")

    if claims.get("scope") != HISTORY_SCOPE:
        raise AuthError("Token does not grant history access")
    return claims


def require_history_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> Dict[str, Any]:
    """
    Dependency rejecting requests without a valid history token.

    Expects `Authorization: Bearer <token>`.
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Unauthorized")
    return verify_history_token(credentials.credentials)
