# certportal/db/bootstrap.py
import logging
import os

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

import certportal.models  # noqa: F401  registra as tabelas no metadata
from certportal.api.permissions import Role
from certportal.core.config import Settings
from certportal.core.security import hash_password
from certportal.crud.user import user_crud
from certportal.db.base import Base
from certportal.models.user import User

logger = logging.getLogger(__name__)

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def run_migrations(database_url: str) -> None:
    # Aponta explicitamente para alembic.ini e migrations/
    cfg = Config(os.path.join(BASE_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(BASE_DIR, "migrations"))
    cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    command.upgrade(cfg, "head")


def prepare_schema(engine: Engine, settings: Settings) -> None:
    if settings.AUTO_MIGRATE:
        run_migrations(settings.DATABASE_URL)
    else:
        Base.metadata.create_all(engine)


def ensure_admin(db: Session, email: str, password: str, rounds: int) -> bool:
    """
    Garante que exista o admin de bootstrap. Se o e-mail já existe não toca em
    nada (senha trocada pelo operador continua valendo). Retorna True se criou.
    """
    if user_crud.get_by_email(db, email) is not None:
        return False
    db.add(User(email=email, password_hash=hash_password(password, rounds), role=Role.ADMIN.value))
    db.commit()
    logger.info("[bootstrap] Usuário admin criado automaticamente (%s).", email)
    return True


def seed_admin(db: Session, email: str, password: str, rounds: int) -> User:
    """Upsert do admin padrão: cria ou redefine a senha (usado pelo CLI de seed)."""
    user = user_crud.get_by_email(db, email)
    password_hash = hash_password(password, rounds)
    if user is None:
        user = User(email=email, password_hash=password_hash, role=Role.ADMIN.value)
        db.add(user)
    else:
        user.password_hash = password_hash
    db.commit(); db.refresh(user)
    return user


def run_migrations_and_seed(engine: Engine, session_factory: sessionmaker, settings: Settings) -> None:
    # falha aqui não impede o startup: a API sobe, possivelmente sem admin
    try:
        prepare_schema(engine, settings)
        with session_factory() as db:
            ensure_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, settings.BCRYPT_SALT_ROUNDS)
    except Exception:
        logger.exception("[bootstrap] Falha ao preparar banco/admin; seguindo sem bootstrap.")
