"""Shared-secret guards and password hashing."""
import hashlib
import hmac
import os
import secrets
from typing import Optional

from fastapi import Header, HTTPException


def require_admin_key(x_api_key: Optional[str] = Header(None)):
    """When ADMIN_API_KEY is set, admin endpoints require a matching X-API-KEY header."""
    admin_key = os.getenv('ADMIN_API_KEY')
    if admin_key and not (x_api_key and hmac.compare_digest(x_api_key, admin_key)):
        raise HTTPException(status_code=401, detail='Unauthorized')


def require_cron_secret(authorization: Optional[str] = Header(None)):
    """When CRON_SECRET is set, scheduler calls must send `Authorization: Bearer <CRON_SECRET>`."""
    secret = os.getenv('CRON_SECRET')
    if secret and authorization != f'Bearer {secret}':
        raise HTTPException(status_code=401, detail='Unauthorized')


# Existing accounts were stored as unsalted sha256 hex digests; keep the format.
def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode('utf-8')).hexdigest()


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    return hmac.compare_digest(hash_password(password), password_hash)


def new_session_token() -> str:
    return secrets.token_hex(32)
