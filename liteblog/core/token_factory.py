"""Pure functions for creating and decoding user session tokens (HS256 JWT).

No classes beyond the payload value, no state. The auth dependency decodes
tokens on every request; auth_routes issues them on login.
"""

import hashlib
import hmac
import base64
import json
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

TOKEN_ISSUER = "liteblog"


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT payload. Immutable.

    ``roles`` is a snapshot from login time; authorization re-reads roles from
    the database, so this is informational only.
    """
    user_id: int
    email: str
    exp: datetime
    roles: tuple = field(default_factory=tuple)


def create_token(
    user_id: int,
    email: str,
    roles: list[str],
    secret: str,
    algorithm: str = "HS256",
    expires_hours: int = 24,
) -> str:
    """Create a signed JWT for a logged-in user.

    Args:
        user_id: Database id, stored as the ``sub`` claim.
        email: User's email address.
        roles: Role codes at login time.
        secret: HMAC signing key.
        algorithm: Only HS256 supported.
        expires_hours: Hours until expiry.

    Returns:
        Encoded JWT string.
    """
    if algorithm != "HS256":
        raise ValueError(f"Unsupported algorithm: {algorithm}")

    now = time.time()
    claims = {
        "sub": str(user_id),
        "email": email,
        "roles": list(roles),
        "iat": int(now),
        "exp": int(now + expires_hours * 3600),
        "iss": TOKEN_ISSUER,
    }

    segments = [
        _b64encode(json.dumps({"alg": "HS256", "typ": "JWT"}).encode()),
        _b64encode(json.dumps(claims).encode()),
    ]
    signing_input = b".".join(segments)
    segments.append(_b64encode(_sign(secret, signing_input)))
    return b".".join(segments).decode()


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> Optional[TokenPayload]:
    """Decode and validate a JWT.

    Returns ``None`` on any failure (bad signature, expired, wrong issuer,
    malformed) rather than raising; callers decide what absence means.
    """
    if algorithm != "HS256" or not token:
        return None
    try:
        parts = token.encode().split(b".")
        if len(parts) != 3:
            return None

        header_b64, claims_b64, sig_b64 = parts
        if not hmac.compare_digest(_sign(secret, header_b64 + b"." + claims_b64), _b64decode(sig_b64)):
            return None

        claims = json.loads(_b64decode(claims_b64))
        exp = claims.get("exp", 0)
        if time.time() > exp:
            return None
        if claims.get("iss") != TOKEN_ISSUER:
            return None

        return TokenPayload(
            user_id=int(claims["sub"]),
            email=claims.get("email", ""),
            roles=tuple(claims.get("roles", ())),
            exp=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
    except (json.JSONDecodeError, KeyError, ValueError, TypeError, IndexError):
        return None


def _sign(secret: str, signing_input: bytes) -> bytes:
    return hmac.new(secret.encode(), signing_input, hashlib.sha256).digest()


# --- base64url helpers (no padding, URL-safe) ---

def _b64encode(data: bytes) -> bytes:
    return base64.urlsafe_b64encode(data).rstrip(b"=")


def _b64decode(data: bytes) -> bytes:
    padding = 4 - len(data) % 4
    if padding != 4:
        data += b"=" * padding
    return base64.urlsafe_b64decode(data)
