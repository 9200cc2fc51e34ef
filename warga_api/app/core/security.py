"""
Security helpers for bearer-token authentication and role checks.

Tokens are JSON Web Tokens signed with HMAC‑SHA256 and base64url
encoded.  They embed a subject (``sub``), the caller's ``role`` and an
expiration timestamp (``exp``).  The signing key comes from the
application settings.

Write endpoints are guarded with ``require_roles``; read endpoints only
need ``get_current_user``.
"""

import base64
import hashlib
import hmac
import json
import time
from typing import Any, Callable, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .exceptions import AuthenticationError, PermissionDeniedError


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT token with the given payload.

    Parameters
    ----------
    data : dict
        Claims to embed in the token, e.g.
        ``{"sub": "pak.rt@example.com", "role": "ketuaRT"}``.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        ``header.payload.signature``, each part base64url encoded.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta if expires_delta is not None else settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": settings.algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Returns the payload if the signature matches and the token has not
    expired, otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        # Constant‑time comparison
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    exp = data.get("exp")
    if not isinstance(exp, (int, float)) or int(exp) < int(time.time()):
        return None
    return data


security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """Dependency that returns the decoded token of the caller.

    Raises ``AuthenticationError`` (401) when the ``Authorization``
    header is missing or the token is invalid or expired.
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise AuthenticationError("Invalid or expired token")
    return payload


# ---------------------------------------------------------------------------
# Role-based access control (RBAC) helpers
# ---------------------------------------------------------------------------

def require_roles(*roles: str) -> Callable[..., Dict[str, Any]]:
    """Dependency factory to enforce that the caller has one of ``roles``.

    Use in endpoints via ``Depends(require_roles("adminSistem", "ketuaRT"))``.
    Raises ``PermissionDeniedError`` (403) otherwise.
    """

    def _role_dependency(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if current_user.get("role") not in roles:
            raise PermissionDeniedError("Access denied. Insufficient permissions")
        return current_user

    return _role_dependency


def require_privileged() -> Callable[..., Dict[str, Any]]:
    """Shortcut for the configured set of roles allowed to mutate records."""
    return require_roles(*settings.privileged_roles)
