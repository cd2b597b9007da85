# certportal/schemas/certificate.py
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field

from certportal.core.cpf import normalize_cpf


def _cpf_or_error(value: str) -> str:
    cpf = normalize_cpf(value)
    if cpf is None:
        raise ValueError("CPF inválido")
    return cpf


def _coerce_date(value: Any) -> Any:
    # aceita "2024-03-01" e também "2024-03-01T00:00:00.000Z" (o front manda ISO completo)
    if isinstance(value, str) and "T" in value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        return parsed.date()
    return value


CPF = Annotated[str, Field(min_length=11, max_length=14), AfterValidator(_cpf_or_error)]
CalendarDate = Annotated[date, BeforeValidator(_coerce_date)]
Text = Annotated[str, Field(min_length=1)]


class CertificateBase(BaseModel):
    cpf: CPF
    registro: Text
    matricula: Text
    nome: Text
    curso: Text
    inicio: CalendarDate
    fim: CalendarDate


class CertificateCreate(CertificateBase):
    pass


class CertificateUpdate(BaseModel):  # edição parcial: só o que vier é aplicado
    cpf: Optional[CPF] = None
    registro: Optional[Text] = None
    matricula: Optional[Text] = None
    nome: Optional[Text] = None
    curso: Optional[Text] = None
    inicio: Optional[CalendarDate] = None
    fim: Optional[CalendarDate] = None


class Certificate(BaseModel):
    id: str
    cpf: str
    registro: str
    matricula: str
    nome: str
    curso: str
    inicio: date
    fim: date
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
