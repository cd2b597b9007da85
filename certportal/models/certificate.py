from datetime import date, datetime

from sqlalchemy import Date, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from certportal.db.base import Base, new_id, utcnow


class Certificate(Base):
    __tablename__ = "certificates"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    # sempre normalizado (11 dígitos); não é único: uma pessoa, vários cursos
    cpf: Mapped[str] = mapped_column(String(11), index=True)
    registro: Mapped[str] = mapped_column(String(64))
    matricula: Mapped[str] = mapped_column(String(64))
    nome: Mapped[str] = mapped_column(String(200))
    curso: Mapped[str] = mapped_column(String(200))
    inicio: Mapped[date] = mapped_column(Date)
    fim: Mapped[date] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
