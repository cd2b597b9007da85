"""
Tarefas administrativas fora da API.

    certportal-admin seed                      # cria/redefine o admin padrão
    certportal-admin import-certificates FILE  # importa certificados legados (JSON)
"""
import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import ValidationError

from certportal.core.config import get_settings
from certportal.core.cpf import format_cpf
from certportal.core.logging import setup_logging
from certportal.crud.certificate import certificate_crud
from certportal.db.bootstrap import prepare_schema, seed_admin
from certportal.db.session import build_engine, build_session_factory
from certportal.schemas.certificate import CertificateCreate

logger = logging.getLogger("certportal.cli")


def parse_legacy_date(value: str) -> date:
    """'31/12/2023' -> date(2023, 12, 31)"""
    if not isinstance(value, str):
        raise ValueError(f"Data inválida: {value!r}")
    try:
        day, month, year = (int(part) for part in value.split("/"))
        return date(year, month, day)
    except (ValueError, TypeError):
        raise ValueError(f"Data inválida: {value}") from None


def load_legacy_certificates(path: Path) -> List[CertificateCreate]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError("O arquivo deve conter uma lista de certificados")
    items = []
    for position, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ValueError(f"Item {position} não é um objeto")
        items.append(CertificateCreate(
            cpf=entry["cpf"],
            registro=entry["registro"],
            matricula=entry["matricula"],
            nome=entry["nome"],
            curso=entry["curso"],
            inicio=parse_legacy_date(entry["inicio"]),
            fim=parse_legacy_date(entry["fim"]),
        ))
    return items


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="certportal-admin", description="Certificate portal admin tasks")
    sub = parser.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed", help="Create the default admin or reset its password")
    seed.add_argument("--email", default=None, help="Admin email (defaults to ADMIN_EMAIL)")
    seed.add_argument("--password", default=None, help="Admin password (defaults to ADMIN_PASSWORD)")

    imp = sub.add_parser("import-certificates", help="Import legacy certificates from a JSON file")
    imp.add_argument("path", type=Path, help="JSON list with cpf, registro, matricula, nome, curso, inicio, fim (dd/mm/yyyy)")

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    engine = build_engine(settings.DATABASE_URL)
    prepare_schema(engine, settings)
    session_factory = build_session_factory(engine)

    if args.command == "seed":
        email = args.email or settings.ADMIN_EMAIL
        with session_factory() as db:
            seed_admin(db, email, args.password or settings.ADMIN_PASSWORD, settings.BCRYPT_SALT_ROUNDS)
        print(f"Administrador padrão disponível em {email}")
        return 0

    try:
        items = load_legacy_certificates(args.path)
    except (OSError, KeyError, ValueError, ValidationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for item in items:
        logger.debug("importando %s (%s)", format_cpf(item.cpf), item.curso)
    with session_factory() as db:
        created = certificate_crud.bulk_create(db, items)
    print(f"Importados {created} de {len(items)} certificados para o banco")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
