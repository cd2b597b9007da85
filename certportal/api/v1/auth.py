# certportal/api/v1/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from certportal.api.deps import get_current_identity, get_db, get_token_service
from certportal.core.errors import AuthenticationError, NotFoundError
from certportal.core.security import verify_password
from certportal.core.tokens import AuthContext, TokenService
from certportal.crud.user import user_crud
from certportal.schemas.token import LoginRequest, LoginResponse
from certportal.schemas.user import UserPublic

router = APIRouter()

INVALID_CREDENTIALS = "Credenciais invalidas"


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    # e-mail desconhecido e senha errada respondem igual
    user = user_crud.get_by_email(db, body.email)
    if not user or not verify_password(body.password, user.password_hash):
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = tokens.issue(user.id, user.role)
    return LoginResponse(token=token, user=UserPublic.model_validate(user))


@router.get("/me", response_model=UserPublic)
def me(
    identity: AuthContext = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    user = user_crud.get(db, identity.subject_id)
    if not user:
        # conta removida depois da emissão do token
        raise NotFoundError("Usuario nao encontrado")
    return UserPublic.model_validate(user)
