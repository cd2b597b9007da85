# certportal/api/v1/certificates.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, Response
from sqlalchemy.orm import Session

from certportal.api.deps import get_current_identity, get_db
from certportal.api.permissions import require_admin
from certportal.core.cpf import normalize_cpf
from certportal.core.errors import NotFoundError, ValidationError
from certportal.crud.certificate import certificate_crud
from certportal.models.certificate import Certificate
from certportal.schemas.certificate import Certificate as CertificateOut
from certportal.schemas.certificate import CertificateCreate, CertificateUpdate

router = APIRouter()

NOT_FOUND = "Certificado nao encontrado"


def _get_or_404(db: Session, certificate_id: str) -> Certificate:
    cert = certificate_crud.get(db, certificate_id)
    if not cert:
        raise NotFoundError(NOT_FOUND)
    return cert


# -------------------------- público --------------------------

@router.get("/lookup/{cpf}", response_model=List[CertificateOut])
def lookup(cpf: str, db: Session = Depends(get_db)):
    normalized = normalize_cpf(cpf)
    if not normalized:
        raise ValidationError("CPF inválido")

    certificates = certificate_crud.find_by_cpf(db, normalized)
    if not certificates:
        # lista vazia não é sucesso: "CPF válido, mas desconhecido"
        raise NotFoundError("Nenhum certificado encontrado")
    return certificates


# ----------------------- autenticado -------------------------

@router.get("", response_model=List[CertificateOut],
            dependencies=[Depends(get_current_identity)])
def list_certificates(db: Session = Depends(get_db)):
    return certificate_crud.list_recent(db)


# --------------------------- admin ---------------------------

@router.post("", response_model=CertificateOut, status_code=201,
             dependencies=[Depends(require_admin)])
def create_certificate(body: CertificateCreate, db: Session = Depends(get_db)):
    return certificate_crud.create(db, body)


@router.put("/{certificate_id}", response_model=CertificateOut,
            dependencies=[Depends(require_admin)])
def update_certificate(
    body: CertificateUpdate,
    certificate_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
):
    cert = _get_or_404(db, certificate_id)
    return certificate_crud.update(db, cert, body)


@router.delete("/{certificate_id}", status_code=204,
               dependencies=[Depends(require_admin)])
def delete_certificate(
    certificate_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
):
    if certificate_crud.remove(db, certificate_id) is None:
        raise NotFoundError(NOT_FOUND)
    return Response(status_code=204)
