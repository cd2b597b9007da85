# certportal/api/v1/users.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, Response
from sqlalchemy.orm import Session

from certportal.api.deps import get_db, get_settings
from certportal.api.permissions import require_admin
from certportal.core.config import Settings
from certportal.core.errors import ConflictError, NotFoundError
from certportal.crud.user import user_crud
from certportal.schemas.user import AdminCreate, AdminOut, AdminUpdate

# todas as rotas exigem token válido + papel ADMIN
router = APIRouter(dependencies=[Depends(require_admin)])

NOT_FOUND = "Usuario nao encontrado"


@router.get("", response_model=List[AdminOut])
def list_users(db: Session = Depends(get_db)):
    return user_crud.list_all(db)


@router.post("", response_model=AdminOut, status_code=201)
def create_user(
    body: AdminCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if user_crud.get_by_email(db, body.email) is not None:
        raise ConflictError("E-mail ja cadastrado")
    return user_crud.create(db, body, rounds=settings.BCRYPT_SALT_ROUNDS)


@router.patch("/{user_id}", response_model=AdminOut)
def update_user(
    body: AdminUpdate,
    user_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user = user_crud.get(db, user_id)
    if not user:
        raise NotFoundError(NOT_FOUND)
    return user_crud.update(db, user, body, rounds=settings.BCRYPT_SALT_ROUNDS)


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
):
    # o próprio admin pode se remover; nenhuma regra impede
    if user_crud.remove(db, user_id) is None:
        raise NotFoundError(NOT_FOUND)
    return Response(status_code=204)
