"""JWT verification for manual reap callers.

Tokens are issued by the surrounding asset system; the reaper only verifies
them with the shared secret and reads the caller's identity and permissions.
"""

from typing import Any

from jose import JWTError, jwt

from reaper.core.config import get_settings


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if "sub" not in payload:
        raise ValueError("Token missing required claim: sub")
    return payload


def permissions_from_payload(payload: dict[str, Any]) -> frozenset[str]:
    """Return the permissions claim as a set of codes (missing or malformed -> empty)."""
    raw = payload.get("permissions") or []
    if isinstance(raw, str):
        raw = raw.split()
    if not isinstance(raw, list):
        return frozenset()
    return frozenset(str(p) for p in raw)
