# certportal/core/tokens.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from certportal.core.errors import AuthenticationError

INVALID_TOKEN = "Token invalido"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AuthContext:
    """Identidade autenticada, repassada explicitamente do guard ao handler."""
    subject_id: str
    role: str


class TokenService:
    """Emite e verifica os tokens de sessão (JWT HS256, sem revogação)."""

    MIN_SECRET_LENGTH = 16

    def __init__(self, secret: str, ttl: timedelta, algorithm: str = "HS256"):
        if not secret or len(secret) < self.MIN_SECRET_LENGTH:
            raise ValueError(f"JWT secret must have at least {self.MIN_SECRET_LENGTH} characters")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm

    def issue(self, subject_id: str, role: str, ttl: Optional[timedelta] = None) -> str:
        issued_at = _now()
        payload: Dict[str, Any] = {
            "sub": str(subject_id),
            "role": role,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + (ttl if ttl is not None else self._ttl)).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> AuthContext:
        # malformado, assinatura errada ou expirado: mesma resposta
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError:
            raise AuthenticationError(INVALID_TOKEN) from None
        if not isinstance(payload, dict):
            raise AuthenticationError(INVALID_TOKEN)
        sub, role = payload.get("sub"), payload.get("role")
        if not isinstance(sub, str) or not isinstance(role, str):
            raise AuthenticationError(INVALID_TOKEN)
        return AuthContext(subject_id=sub, role=role)
