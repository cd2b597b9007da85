from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from certportal.crud.base import CRUDBase
from certportal.models.certificate import Certificate
from certportal.schemas.certificate import CertificateCreate, CertificateUpdate


class CRUDCertificate(CRUDBase[Certificate, CertificateCreate, CertificateUpdate]):
    def find_by_cpf(self, db: Session, cpf: str) -> List[Certificate]:
        """Todos os certificados do CPF (já normalizado), mais recentes primeiro."""
        stmt = (
            select(Certificate)
            .where(Certificate.cpf == cpf)
            .order_by(Certificate.inicio.desc(), Certificate.created_at.desc())
        )
        return list(db.scalars(stmt).all())

    def list_recent(self, db: Session) -> List[Certificate]:
        return list(db.scalars(select(Certificate).order_by(Certificate.created_at.desc())).all())

    def bulk_create(self, db: Session, items: Iterable[CertificateCreate]) -> int:
        """
        Importação em lote. Pula o que já existe com mesmo CPF, registro e curso
        (no banco ou repetido no próprio lote). Retorna quantos foram gravados.
        """
        seen = {
            (c.cpf, c.registro, c.curso)
            for c in db.scalars(select(Certificate)).all()
        }
        created = 0
        for item in items:
            key = (item.cpf, item.registro, item.curso)
            if key in seen:
                continue
            seen.add(key)
            db.add(Certificate(**item.model_dump()))
            created += 1
        db.commit()
        return created


certificate_crud = CRUDCertificate(Certificate)
