from typing import Generator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from certportal.core.config import Settings
from certportal.core.errors import AuthenticationError
from certportal.core.tokens import INVALID_TOKEN, AuthContext, TokenService

BEARER_PREFIX = "Bearer "


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


# ----------------------------------------------------------------------
# Lê o Bearer do header Authorization; não chega a tocar no TokenService
# se o header estiver ausente ou fora do formato
# ----------------------------------------------------------------------
def get_bearer_token(authorization: Optional[str] = Header(None, alias="Authorization")) -> str:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError("Token nao informado")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthenticationError(INVALID_TOKEN)
    return token


def get_current_identity(
    token: str = Depends(get_bearer_token),
    tokens: TokenService = Depends(get_token_service),
) -> AuthContext:
    return tokens.verify(token)
